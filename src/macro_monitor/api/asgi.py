"""ASGI entrypoint for the macro monitor API."""

from macro_monitor.api.app import create_app
from macro_monitor.containers import build_container

app = create_app(build_container())
