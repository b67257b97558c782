"""Schedules router - /schedules submission and availability endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query
from starlette.requests import Request
from starlette.responses import Response

from callrates.deps import get_resolver, get_schedule_service
from callrates.errors import StoreError, ValidationError
from callrates.models import ScheduleSubmission
from callrates.records import CALL_KINDS, normalize_owner

router = APIRouter()

logger = logging.getLogger("schedules")

NO_STORE = "no-store"


def _owner_or_400(owner: str) -> str:
    try:
        return normalize_owner(owner)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/schedules")
async def submit_schedules(request: Request, req: ScheduleSubmission):
    try:
        inserted = await get_schedule_service(request).submit(req)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.error("Schedule submission failed: %s", e)
        raise HTTPException(status_code=500, detail="Insert schedules failed")
    return {"ok": True, "inserted": inserted}


@router.get("/schedules/availability")
async def get_availability(
    request: Request,
    response: Response,
    owner: str = Query(default=""),
):
    owner = _owner_or_400(owner)
    try:
        resolved = await get_resolver(request).resolve(owner)
    except StoreError as e:
        logger.error("Availability lookup for %s failed: %s", owner, e)
        raise HTTPException(status_code=500, detail="DB error")
    response.headers["Cache-Control"] = NO_STORE
    return resolved.to_dict()


@router.get("/schedules/prices")
async def get_prices(
    request: Request,
    response: Response,
    owner: str = Query(default=""),
):
    """Current per-session price, slot width and currency for each call kind."""
    owner = _owner_or_400(owner)
    try:
        prices = await get_resolver(request).latest_prices(owner)
    except StoreError as e:
        logger.error("Price lookup for %s failed: %s", owner, e)
        raise HTTPException(status_code=500, detail="DB error")
    response.headers["Cache-Control"] = NO_STORE
    result = {"owner": owner}
    for kind in CALL_KINDS:
        price = prices.get(kind)
        result[kind.value] = price.to_dict() if price else None
    return result


@router.get("/schedules")
async def list_schedules(
    request: Request,
    response: Response,
    owner: str = Query(default=""),
):
    """Raw submission history, newest first, for the schedule editor."""
    owner = _owner_or_400(owner)
    try:
        history = await get_schedule_service(request).history(owner)
    except StoreError as e:
        logger.error("Schedule history for %s failed: %s", owner, e)
        raise HTTPException(status_code=500, detail="DB error")
    response.headers["Cache-Control"] = NO_STORE
    return {
        "owner": owner,
        "items": [
            {
                "day": r.day_of_week,
                "kind": r.kind.value,
                "start": r.start_time,
                "duration": r.duration_minutes,
                "slots": list(r.explicit_slots),
                "priceCents": r.price_cents,
                "currency": r.currency,
                "slotWidthMinutes": r.slot_width_minutes,
                "createdAt": r.created_at,
            }
            for r in history
        ],
    }
