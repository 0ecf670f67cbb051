"""Season schedule feed."""

from paddock.providers.schedule.parser import parse_schedule, validate_schedule

__all__ = ["parse_schedule", "validate_schedule"]
