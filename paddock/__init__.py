"""Paddock - racing schedule and standings data for home-screen widgets."""

__version__ = "1.0.0"
