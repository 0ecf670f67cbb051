"""Service layer.

Lookup tables are importable from here. The widget data service lives in
``paddock.services.widget_data`` and is imported from there directly, since
it depends on the consumers that themselves use these lookups.
"""

from paddock.services.lookups import (
    DEFAULT_TEAM_COLOR,
    FLAG_CODES,
    SESSION_LABELS,
    TEAM_INFO,
    Lookup,
    TeamInfo,
    default_lookup,
)

__all__ = [
    "DEFAULT_TEAM_COLOR",
    "FLAG_CODES",
    "SESSION_LABELS",
    "TEAM_INFO",
    "Lookup",
    "TeamInfo",
    "default_lookup",
]
