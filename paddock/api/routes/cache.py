"""Feed cache endpoints.

- GET /cache/status - Age and staleness of every cache slot
- DELETE /cache/{slot} - Drop a slot so the next request refetches it
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from paddock.api.deps import get_widget_service
from paddock.api.models import CacheSlotStatusModel, CacheStatusResponse
from paddock.services.widget_data import WidgetDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache")


@router.get("/status", response_model=CacheStatusResponse)
def get_cache_status(
    service: WidgetDataService = Depends(get_widget_service),
) -> CacheStatusResponse:
    """Get freshness of each feed cache slot."""
    slots = []
    for config in service.slots():
        slot_status = service.fetcher.status(config)
        slots.append(
            CacheSlotStatusModel(
                slot=config.slot,
                resource=config.resource,
                exists=slot_status.exists,
                written_at=slot_status.written_at,
                age_seconds=(
                    slot_status.age.total_seconds() if slot_status.age is not None else None
                ),
                expiry_seconds=config.expiry.total_seconds(),
                is_stale=slot_status.is_stale,
            )
        )
    return CacheStatusResponse(slots=slots)


@router.delete("/{slot}")
def invalidate_slot(
    slot: str,
    service: WidgetDataService = Depends(get_widget_service),
) -> dict:
    """Invalidate one cache slot."""
    known = {config.slot for config in service.slots()}
    if slot not in known:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown cache slot")

    removed = service.fetcher.invalidate(slot)
    return {"slot": slot, "removed": removed}
