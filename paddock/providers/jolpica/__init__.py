"""Jolpica (Ergast mirror) championship standings feed."""

from paddock.providers.jolpica.parser import (
    parse_constructor_standings,
    parse_driver_standings,
    validate_constructor_standings,
    validate_driver_standings,
)

__all__ = [
    "parse_constructor_standings",
    "parse_driver_standings",
    "validate_constructor_standings",
    "validate_driver_standings",
]
