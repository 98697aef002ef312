"""Text cleanup for feed descriptions."""

import html
import re

_TAG_PATTERN = re.compile(r"<[^>]*>")
_ANGLE_PATTERN = re.compile(r"[<>]")
_DIETARY_PATTERN = re.compile(r"::(.*?)::")

DIETARY_ABBREVIATIONS = {
    "vegan": "(v)",
    "vegetarian": "(vg)",
    "kosher": "(k)",
    "halal": "(h)",
    "gluten-free": "(gf)",
}


def strip_markup(text: str) -> str:
    """Remove anything between angle brackets, brackets included."""
    return _TAG_PATTERN.sub("", text)


def expand_dietary_tags(text: str) -> str:
    """Replace ``::keyword::`` markers with their short abbreviation.

    Unknown keywords are dropped along with their delimiters.
    """
    return _DIETARY_PATTERN.sub(
        lambda match: DIETARY_ABBREVIATIONS.get(match.group(1), ""), text
    )


def decode_markup(text: str) -> str:
    """Strip tags and decode entities until neither changes the text."""
    decoded = html.unescape(strip_markup(text))
    while decoded != text:
        text, decoded = decoded, html.unescape(strip_markup(decoded))
    return decoded


def _clean_once(text: str) -> str:
    cleaned = _ANGLE_PATTERN.sub("", decode_markup(text))
    return expand_dietary_tags(cleaned).strip()


def normalize_text(text: str) -> str:
    """Return feed text that is safe to display as-is.

    Cleanup repeats until the text stops changing, so encoded markup such as
    ``&lt;b&gt;`` never survives as a tag or an entity. Every step only
    shortens the text, which bounds the loop.
    """
    cleaned = _clean_once(text)
    while cleaned != text:
        text, cleaned = cleaned, _clean_once(cleaned)
    return cleaned
