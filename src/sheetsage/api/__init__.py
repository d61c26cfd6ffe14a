"""HTTP surface for SheetSage."""

from .app import create_app

__all__ = ["create_app"]
