"""HTTP API for taskboard."""

from taskboard.api.app import create_app
from taskboard.api.settings import Settings

__all__ = ["create_app", "Settings"]
