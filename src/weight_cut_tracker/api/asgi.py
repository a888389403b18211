"""ASGI entrypoint for the weight cut tracker API."""

from weight_cut_tracker.api.app import create_app
from weight_cut_tracker.containers import build_container

app = create_app(build_container())
