"""HTML rendering for the menu page."""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from dining_menu.domain.menu import RenderModel

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"


@dataclass
class MenuRenderer:
    """Renders the menu and error pages from the bundled templates."""

    environment: Environment

    @classmethod
    def create(cls, template_dir: Path = TEMPLATE_DIR) -> "MenuRenderer":
        # Feed text is sanitized before it reaches the templates.
        environment = Environment(
            loader=FileSystemLoader(template_dir), autoescape=False
        )
        return cls(environment=environment)

    def render_menu(self, model: RenderModel) -> str:
        template = self.environment.get_template("index.html")
        return template.render(**model.to_context())

    def error_page(self) -> str:
        return self.environment.get_template("error.html").render()
