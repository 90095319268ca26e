"""HTTP API."""

from planner.api.app import create_app

__all__ = ["create_app"]
