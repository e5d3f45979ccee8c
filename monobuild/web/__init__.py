"""HTTP API for monobuild."""

from monobuild.web.app import create_app

__all__ = ["create_app"]
