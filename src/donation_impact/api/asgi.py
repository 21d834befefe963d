"""ASGI entrypoint for the donation impact API."""

from donation_impact.api.app import create_app
from donation_impact.containers import build_container

app = create_app(build_container())
