"""ASGI entrypoint for the session directory API."""

from session_directory.api.app import create_app
from session_directory.containers import build_container

app = create_app(build_container())
