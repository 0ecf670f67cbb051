"""API route modules."""

from paddock.api.routes import cache, settings, widgets

__all__ = ["cache", "settings", "widgets"]
