"""ASGI entrypoint for the fitness tracker photo API."""

from fitness_tracker.api.app import create_app
from fitness_tracker.containers import build_container

app = create_app(build_container())
