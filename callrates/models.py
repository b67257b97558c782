"""Pydantic request models for the REST API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from callrates.records import DEFAULT_CURRENCY
from callrates.slots import DEFAULT_SLOT_WIDTH


class ScheduleItem(BaseModel):
    day: int
    start: Optional[str] = None
    duration: Optional[int] = None
    slots: Optional[List[str]] = None


class KindPlan(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_cents: int = Field(alias="priceCents")
    items: List[ScheduleItem] = []


class ScheduleSubmission(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    currency: str = DEFAULT_CURRENCY
    slot_width_minutes: int = Field(default=DEFAULT_SLOT_WIDTH, alias="slotWidthMinutes")
    voice: Optional[KindPlan] = None
    video: Optional[KindPlan] = None
