"""Settings endpoints."""

from fastapi import APIRouter, HTTPException, status

from paddock.api.models import DisplaySettingsModel, FeedSettingsModel
from paddock.database import get_db
from paddock.database.settings import (
    get_all_settings,
    update_display_settings,
    update_feed_settings,
)
from paddock.utilities.tz import is_valid_timezone

router = APIRouter(prefix="/settings")


# =============================================================================
# FEED SETTINGS
# =============================================================================


@router.get("/feeds", response_model=FeedSettingsModel)
def get_feed_settings() -> FeedSettingsModel:
    """Get feed locations and cache expiry."""
    with get_db() as conn:
        feeds = get_all_settings(conn).feeds

    return FeedSettingsModel(
        season=feeds.season,
        schedule_url=feeds.schedule_url,
        standings_base_url=feeds.standings_base_url,
        schedule_expiry_hours=feeds.schedule_expiry_hours,
        driver_standings_expiry_hours=feeds.driver_standings_expiry_hours,
        constructor_standings_expiry_hours=feeds.constructor_standings_expiry_hours,
    )


@router.put("/feeds", response_model=FeedSettingsModel)
def put_feed_settings(update: FeedSettingsModel) -> FeedSettingsModel:
    """Update feed settings. Omitted fields are left unchanged."""
    with get_db() as conn:
        update_feed_settings(conn, **update.model_dump())

    return get_feed_settings()


# =============================================================================
# DISPLAY SETTINGS
# =============================================================================


@router.get("/display", response_model=DisplaySettingsModel)
def get_display_settings() -> DisplaySettingsModel:
    """Get display settings."""
    with get_db() as conn:
        display = get_all_settings(conn).display

    return DisplaySettingsModel(timezone=display.timezone, include_flag=display.include_flag)


@router.put("/display", response_model=DisplaySettingsModel)
def put_display_settings(update: DisplaySettingsModel) -> DisplaySettingsModel:
    """Update display settings."""
    if update.timezone is not None and not is_valid_timezone(update.timezone):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown timezone")

    with get_db() as conn:
        update_display_settings(conn, timezone=update.timezone, include_flag=update.include_flag)

    return get_display_settings()
