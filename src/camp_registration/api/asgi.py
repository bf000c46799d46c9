"""ASGI entrypoint for the camp registration API."""

from camp_registration.api.app import create_app
from camp_registration.containers import build_container

app = create_app(build_container())
