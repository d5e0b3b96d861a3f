"""HTTP surface for ISF metadata introspection."""

from .server import create_app

__all__ = ["create_app"]
