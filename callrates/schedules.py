"""
schedules.py - Weekly plan submission.

Turns a ScheduleSubmission request into ScheduleRecords, one per
(kind, day item), and appends them as a single batch. All validation happens
before anything is written; the first invalid item is reported.
"""

import logging
from typing import TYPE_CHECKING, List

from callrates.errors import ValidationError
from callrates.models import KindPlan, ScheduleItem, ScheduleSubmission
from callrates.records import (
    CallKind,
    RecordHistory,
    ScheduleRecord,
    normalize_currency,
    normalize_owner,
)

if TYPE_CHECKING:
    from callrates.storage import ScheduleRepo

logger = logging.getLogger("schedules")


class ScheduleService:
    """Validates and stores owner schedule submissions."""

    def __init__(self, schedule_repo: "ScheduleRepo"):
        self._schedules = schedule_repo

    async def submit(self, req: ScheduleSubmission) -> int:
        """Store one weekly plan. Returns the number of rows inserted."""
        records = build_records(req)
        inserted = await self._schedules.append(records)
        logger.info(
            "Owner %s submitted %d schedule rows (%s)",
            records[0].owner, inserted,
            ", ".join(sorted({r.kind.value for r in records})),
        )
        return inserted

    async def history(self, owner: str) -> RecordHistory:
        return await self._schedules.load_all(normalize_owner(owner))


def build_records(req: ScheduleSubmission) -> List[ScheduleRecord]:
    owner = normalize_owner(req.owner)
    currency = normalize_currency(req.currency)
    if req.slot_width_minutes <= 0:
        raise ValidationError("slotWidthMinutes must be positive")

    plans = [
        (kind, plan)
        for kind, plan in ((CallKind.VOICE, req.voice), (CallKind.VIDEO, req.video))
        if plan is not None
    ]
    if not plans:
        raise ValidationError("No schedules")

    records: List[ScheduleRecord] = []
    for kind, plan in plans:
        records.extend(_plan_records(owner, kind, plan, req.slot_width_minutes, currency))
    return records


def _plan_records(owner: str, kind: CallKind, plan: KindPlan,
                  slot_width: int, currency: str) -> List[ScheduleRecord]:
    if plan.price_cents <= 0:
        raise ValidationError(f"Invalid price for {kind.value}")
    if not plan.items:
        raise ValidationError(f"No schedule items for {kind.value}")

    records = []
    for index, item in enumerate(plan.items):
        record = _item_record(owner, kind, item, plan.price_cents, slot_width, currency)
        try:
            record.validate()
        except ValidationError as e:
            raise ValidationError(
                f"Invalid schedule item for {kind.value} #{index} (day {item.day}): {e}"
            ) from e
        records.append(record)
    return records


def _item_record(owner: str, kind: CallKind, item: ScheduleItem, price_cents: int,
                 slot_width: int, currency: str) -> ScheduleRecord:
    start = item.start.strip() if item.start else None
    return ScheduleRecord(
        owner=owner,
        kind=kind,
        day_of_week=item.day,
        price_cents=price_cents,
        slot_width_minutes=slot_width,
        start_time=start,
        duration_minutes=item.duration,
        explicit_slots=tuple(item.slots or ()),
        currency=currency,
    )
