"""Feed URL builders."""

from paddock.database.settings import FeedSettings


def driver_standings_url(settings: FeedSettings) -> str:
    return f"{settings.standings_base_url.rstrip('/')}/{settings.season}/driverstandings.json"


def constructor_standings_url(settings: FeedSettings) -> str:
    return (
        f"{settings.standings_base_url.rstrip('/')}/{settings.season}/constructorstandings.json"
    )


def schedule_url(settings: FeedSettings) -> str:
    # Only {season} is a placeholder; any other braces are part of the URL
    return settings.schedule_url.replace("{season}", settings.season)
