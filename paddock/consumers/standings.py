"""Standings view helpers.

Column splitting and label choice for championship widgets.
"""

from math import ceil

from paddock.core import StandingsEntry

# Driver grids switch to taller columns once the field passes 20 cars
LARGE_FIELD = 20


def per_column_for(count: int) -> int:
    return 6 if count > LARGE_FIELD else 5


def split_columns(
    entries: list[StandingsEntry],
    per_column: int | None = None,
    max_columns: int | None = None,
) -> list[list[StandingsEntry]]:
    """Split entries into display columns, filling each column top to bottom.

    Args:
        entries: Entries in rank order
        per_column: Rows per column; 6 for fields over 20 entries, else 5
        max_columns: Drop entries that would need more columns than this

    Returns:
        List of columns; empty when there are no entries
    """
    if not entries:
        return []
    per_column = per_column or per_column_for(len(entries))
    num_columns = ceil(len(entries) / per_column)
    if max_columns is not None:
        num_columns = min(num_columns, max_columns)
    return [entries[i * per_column : (i + 1) * per_column] for i in range(num_columns)]


def display_label(entry: StandingsEntry, compact: bool = False) -> str:
    """Short code for compact (small) widgets, full label otherwise."""
    return entry.code if compact else entry.label


def format_points(points: float) -> str:
    """Whole points without a decimal, half points with one."""
    return str(int(points)) if points == int(points) else f"{points:g}"
