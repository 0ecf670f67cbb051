"""Widget view model endpoints.

- GET /widgets/schedule - Next race weekend with sessions by day
- GET /widgets/standings/drivers - Drivers' championship grid
- GET /widgets/standings/constructors - Constructors' championship

Missing data is not an HTTP error: the response carries an ``error``
message for the widget to display and still returns 200.
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query

from paddock.api.deps import get_widget_service
from paddock.api.models import ScheduleResponse, StandingsResponse
from paddock.services.widget_data import WidgetDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/widgets")


@router.get("/schedule", response_model=ScheduleResponse)
def get_schedule(
    group: Literal["weekday", "date"] = Query(
        "weekday", description="Bucket sessions by weekday (small/medium) or date (large)"
    ),
    service: WidgetDataService = Depends(get_widget_service),
) -> ScheduleResponse:
    """Get the next race weekend."""
    state = service.next_weekend(grouping=group)
    if state.error:
        logger.info("[API] Schedule widget empty: %s", state.error)
    return ScheduleResponse.from_state(state)


@router.get("/standings/drivers", response_model=StandingsResponse)
def get_driver_standings(
    service: WidgetDataService = Depends(get_widget_service),
) -> StandingsResponse:
    """Get the drivers' championship split into columns."""
    return StandingsResponse.from_state(service.driver_standings())


@router.get("/standings/constructors", response_model=StandingsResponse)
def get_constructor_standings(
    compact: bool = Query(False, description="Team shorthands for small widgets"),
    service: WidgetDataService = Depends(get_widget_service),
) -> StandingsResponse:
    """Get the constructors' championship (top ten)."""
    return StandingsResponse.from_state(service.constructor_standings(compact=compact))
