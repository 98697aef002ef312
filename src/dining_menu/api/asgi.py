"""ASGI entrypoint for the dining menu page."""

from dining_menu.api.app import create_app
from dining_menu.containers import build_container

app = create_app(build_container())
