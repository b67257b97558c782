"""
records.py - Schedule records and the availability read model.

ScheduleRecord is one persisted row: an owner's plan for one call kind on one
weekday. Rows are never updated; a new submission adds rows and the newest
one wins wherever a single value (price, slot width) is needed.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from callrates.errors import ValidationError
from callrates.slots import DEFAULT_SLOT_WIDTH
from callrates.timecodec import to_minutes

DEFAULT_CURRENCY = "USD"

DAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

_OWNER_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_CURRENCY_RE = re.compile(r"[A-Z]{3}")


class CallKind(str, Enum):
    VOICE = "voice"
    VIDEO = "video"


CALL_KINDS = (CallKind.VOICE, CallKind.VIDEO)


def is_owner_address(value) -> bool:
    return isinstance(value, str) and bool(_OWNER_RE.fullmatch(value))


def normalize_owner(owner) -> str:
    """Validate a 0x-prefixed 40-hex address and return it lowercased."""
    if not is_owner_address(owner):
        raise ValidationError("Bad address")
    return owner.lower()


def normalize_currency(currency: Optional[str]) -> str:
    code = (currency or DEFAULT_CURRENCY).strip().upper()
    if not _CURRENCY_RE.fullmatch(code):
        raise ValidationError(f"Invalid currency {currency!r}")
    return code


def day_name(day: int) -> str:
    return DAY_NAMES[day - 1]


@dataclass(frozen=True)
class ScheduleRecord:
    owner: str
    kind: CallKind
    day_of_week: int  # 1 = Monday .. 7 = Sunday
    price_cents: Optional[int]
    slot_width_minutes: int = DEFAULT_SLOT_WIDTH
    start_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    explicit_slots: Tuple[str, ...] = ()
    currency: str = DEFAULT_CURRENCY
    created_at: float = 0.0
    id: Optional[int] = None

    @property
    def has_interval(self) -> bool:
        return self.start_time is not None and self.duration_minutes is not None

    @property
    def has_explicit_slots(self) -> bool:
        return len(self.explicit_slots) > 0

    def validate(self):
        """Check the write-side invariants. Raises ValidationError (or FormatError)."""
        if not is_owner_address(self.owner):
            raise ValidationError("Bad address")
        if not isinstance(self.kind, CallKind):
            raise ValidationError(f"Unknown call kind {self.kind!r}")
        if not isinstance(self.day_of_week, int) or not 1 <= self.day_of_week <= 7:
            raise ValidationError(f"day must be 1..7, got {self.day_of_week!r}")
        if self.price_cents is None or self.price_cents <= 0:
            raise ValidationError("price must be positive")
        if self.slot_width_minutes <= 0:
            raise ValidationError("slot width must be positive")
        if not _CURRENCY_RE.fullmatch(self.currency or ""):
            raise ValidationError(f"Invalid currency {self.currency!r}")
        if self.start_time is not None:
            to_minutes(self.start_time)
        if self.duration_minutes is not None and self.duration_minutes <= 0:
            raise ValidationError("duration must be positive")
        if not self.has_explicit_slots and not self.has_interval:
            raise ValidationError("either slots or start and duration are required")


@dataclass(frozen=True)
class RecordHistory:
    """All records of one owner, newest first by (created_at, id).

    The ordering is checked on construction; consumers may rely on it.
    """

    owner: str
    records: Tuple[ScheduleRecord, ...] = ()

    def __post_init__(self):
        for newer, older in zip(self.records, self.records[1:]):
            if _recency(newer) < _recency(older):
                raise ValueError("RecordHistory records must be ordered newest first")

    def __iter__(self) -> Iterator[ScheduleRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def newest(self) -> Optional[ScheduleRecord]:
        return self.records[0] if self.records else None

    def of_kind(self, kind: CallKind) -> Iterator[ScheduleRecord]:
        return (r for r in self.records if r.kind == kind)


def _recency(record: ScheduleRecord) -> Tuple[float, int]:
    return (record.created_at, record.id or 0)


@dataclass
class DayAvailability:
    day: int
    voice: List[str] = field(default_factory=list)
    video: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return day_name(self.day)

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "name": self.name,
            "voice": list(self.voice),
            "video": list(self.video),
        }


@dataclass
class KindPrice:
    price_per_session: int
    slot_width_minutes: int
    currency: str

    def to_dict(self) -> dict:
        return {
            "pricePerSession": self.price_per_session,
            "slotWidthMinutes": self.slot_width_minutes,
            "currency": self.currency,
        }


@dataclass
class ResolvedAvailability:
    owner: str
    slot_width_minutes: int = DEFAULT_SLOT_WIDTH
    price_per_session: Dict[CallKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in CALL_KINDS}
    )
    by_day: List[DayAvailability] = field(default_factory=list)
    dropped_slots: int = 0

    def to_dict(self) -> dict:
        return {
            "owner": self.owner,
            "slotWidthMinutes": self.slot_width_minutes,
            "pricePerSession": {k.value: self.price_per_session.get(k, 0) for k in CALL_KINDS},
            "byDay": [d.to_dict() for d in self.by_day],
            "droppedSlots": self.dropped_slots,
        }
