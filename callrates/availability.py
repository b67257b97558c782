"""
availability.py - Availability resolver.

Aggregates every schedule record of an owner into a per-day calendar of
bookable start times for each call kind, plus the current session price.

Rules:
 - Price per kind comes from the newest record of that kind that has a price.
 - Slot width reported for the calendar comes from the newest record overall.
 - Every record contributes slots regardless of age. Explicit slot lists are
   used verbatim (malformed entries are dropped and counted); otherwise the
   record's start/duration is tiled with its own slot width.
 - Slots are unioned per (day, kind), deduplicated and sorted by minute of
   day. Days without records are omitted.
"""

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Set, Tuple

from callrates.errors import FormatError
from callrates.records import (
    CALL_KINDS,
    CallKind,
    DayAvailability,
    KindPrice,
    RecordHistory,
    ResolvedAvailability,
    ScheduleRecord,
)
from callrates.slots import expand
from callrates.timecodec import is_hhmm, to_hhmm, to_minutes

if TYPE_CHECKING:
    from callrates.storage import ScheduleRepo

logger = logging.getLogger("availability")


class AvailabilityResolver:
    """Read-side view over ScheduleRepo. Holds no state between calls."""

    def __init__(self, schedule_repo: "ScheduleRepo"):
        self._schedules = schedule_repo

    async def resolve(self, owner: str) -> ResolvedAvailability:
        history = await self._schedules.load_all(owner)
        return resolve_history(history)

    async def latest_prices(self, owner: str) -> Dict[CallKind, Optional[KindPrice]]:
        history = await self._schedules.load_all(owner)
        return latest_prices(history)


def resolve_history(history: RecordHistory) -> ResolvedAvailability:
    result = ResolvedAvailability(owner=history.owner)
    newest = history.newest()
    if newest is not None:
        result.slot_width_minutes = newest.slot_width_minutes

    for kind in CALL_KINDS:
        priced = next((r for r in history.of_kind(kind) if r.price_cents), None)
        if priced is not None:
            result.price_per_session[kind] = priced.price_cents

    slots: Dict[Tuple[int, CallKind], Set[str]] = defaultdict(set)
    for record in history:
        contributed, dropped = record_slots(record)
        result.dropped_slots += dropped
        slots[(record.day_of_week, record.kind)].update(contributed)

    for day in sorted({day for day, _ in slots}):
        result.by_day.append(DayAvailability(
            day=day,
            voice=sort_slots(slots.get((day, CallKind.VOICE), ())),
            video=sort_slots(slots.get((day, CallKind.VIDEO), ())),
        ))

    if result.dropped_slots:
        logger.warning(
            "Dropped %d malformed slot entries while resolving %s",
            result.dropped_slots, history.owner,
        )
    return result


def latest_prices(history: RecordHistory) -> Dict[CallKind, Optional[KindPrice]]:
    """Newest record per kind, as price/slot width/currency."""
    prices: Dict[CallKind, Optional[KindPrice]] = {}
    for kind in CALL_KINDS:
        latest = next(history.of_kind(kind), None)
        if latest is None:
            prices[kind] = None
            continue
        prices[kind] = KindPrice(
            price_per_session=latest.price_cents or 0,
            slot_width_minutes=latest.slot_width_minutes,
            currency=latest.currency,
        )
    return prices


def record_slots(record: ScheduleRecord) -> Tuple[List[str], int]:
    """Slots one record contributes, and how many stored entries were unusable."""
    if record.has_explicit_slots:
        kept = [s for s in record.explicit_slots if is_hhmm(s)]
        return kept, len(record.explicit_slots) - len(kept)
    if record.has_interval:
        try:
            start = to_minutes(record.start_time)
        except FormatError:
            return [], 1
        tiles = expand(start, record.duration_minutes, record.slot_width_minutes)
        return [to_hhmm(t) for t in tiles], 0
    return [], 0


def sort_slots(slots: Iterable[str]) -> List[str]:
    return sorted(set(slots), key=lambda s: (to_minutes(s), s))
