"""
test_schedule_service.py - Unit tests for weekly plan submission.

Covers request validation in build_records and ScheduleService.submit
writing through ScheduleRepo.
"""

import pytest

from callrates.errors import ValidationError
from callrates.models import ScheduleSubmission
from callrates.records import CallKind
from callrates.schedules import ScheduleService, build_records

OWNER = "0x" + "Ab" * 20


def _submission(**overrides) -> ScheduleSubmission:
    body = {
        "owner": OWNER,
        "voice": {"priceCents": 500, "items": [{"day": 1, "start": "09:00", "duration": 30}]},
    }
    body.update(overrides)
    return ScheduleSubmission.model_validate(body)


class TestBuildRecords:

    def test_single_item(self):
        records = build_records(_submission())
        assert len(records) == 1
        r = records[0]
        assert r.owner == OWNER.lower()
        assert r.kind is CallKind.VOICE
        assert r.day_of_week == 1
        assert r.price_cents == 500
        assert r.start_time == "09:00"
        assert r.duration_minutes == 30
        assert r.explicit_slots == ()
        assert r.currency == "USD"
        assert r.slot_width_minutes == 10

    def test_both_kinds(self):
        records = build_records(_submission(video={
            "priceCents": 1200,
            "items": [{"day": 2, "start": "10:00", "duration": 60},
                      {"day": 4, "slots": ["11:00", "11:10"]}],
        }))
        assert [(r.kind, r.day_of_week) for r in records] == [
            (CallKind.VOICE, 1), (CallKind.VIDEO, 2), (CallKind.VIDEO, 4),
        ]
        assert records[2].explicit_slots == ("11:00", "11:10")
        assert records[2].start_time is None

    def test_currency_normalized(self):
        records = build_records(_submission(currency="eur"))
        assert records[0].currency == "EUR"

    def test_slot_width_applied(self):
        records = build_records(_submission(slotWidthMinutes=15))
        assert records[0].slot_width_minutes == 15

    def test_empty_start_treated_as_missing(self):
        records = build_records(_submission(voice={
            "priceCents": 500, "items": [{"day": 1, "start": "", "slots": ["09:00"]}],
        }))
        assert records[0].start_time is None

    def test_bad_address(self):
        with pytest.raises(ValidationError, match="Bad address"):
            build_records(_submission(owner="0x1234"))

    def test_address_with_trailing_newline(self):
        with pytest.raises(ValidationError, match="Bad address"):
            build_records(_submission(owner=OWNER + "\n"))

    def test_no_kinds(self):
        with pytest.raises(ValidationError, match="No schedules"):
            build_records(ScheduleSubmission(owner=OWNER))

    def test_non_positive_price(self):
        with pytest.raises(ValidationError, match="price for video"):
            build_records(_submission(video={
                "priceCents": 0, "items": [{"day": 1, "start": "09:00", "duration": 30}],
            }))

    def test_kind_without_items(self):
        with pytest.raises(ValidationError, match="No schedule items for voice"):
            build_records(_submission(voice={"priceCents": 500, "items": []}))

    def test_day_out_of_range_names_item(self):
        with pytest.raises(ValidationError) as exc:
            build_records(_submission(voice={
                "priceCents": 500,
                "items": [{"day": 1, "start": "09:00", "duration": 30},
                          {"day": 8, "start": "09:00", "duration": 30}],
            }))
        assert "voice #1 (day 8)" in str(exc.value)

    def test_malformed_start_is_validation_error(self):
        with pytest.raises(ValidationError, match="HH:MM"):
            build_records(_submission(voice={
                "priceCents": 500, "items": [{"day": 3, "start": "9am", "duration": 30}],
            }))

    def test_non_positive_duration(self):
        with pytest.raises(ValidationError, match="duration"):
            build_records(_submission(voice={
                "priceCents": 500, "items": [{"day": 3, "start": "09:00", "duration": 0}],
            }))

    def test_item_without_slots_or_interval(self):
        with pytest.raises(ValidationError, match="slots or start and duration"):
            build_records(_submission(voice={
                "priceCents": 500, "items": [{"day": 3, "start": "09:00"}],
            }))

    def test_bad_currency(self):
        with pytest.raises(ValidationError, match="currency"):
            build_records(_submission(currency="dollars"))

    def test_non_positive_slot_width(self):
        with pytest.raises(ValidationError, match="slotWidthMinutes"):
            build_records(_submission(slotWidthMinutes=0))


@pytest.mark.asyncio
class TestScheduleService:

    async def test_submit_persists_rows(self, repo):
        service = ScheduleService(repo)
        inserted = await service.submit(_submission(video={
            "priceCents": 800, "items": [{"day": 5, "start": "18:00", "duration": 60}],
        }))
        assert inserted == 2
        history = await service.history(OWNER)
        assert {r.kind for r in history} == {CallKind.VOICE, CallKind.VIDEO}

    async def test_invalid_submission_writes_nothing(self, repo):
        service = ScheduleService(repo)
        with pytest.raises(ValidationError):
            await service.submit(_submission(video={
                "priceCents": 800, "items": [{"day": 9, "start": "18:00", "duration": 60}],
            }))
        assert await repo.count() == 0

    async def test_history_rejects_bad_owner(self, repo):
        with pytest.raises(ValidationError):
            await ScheduleService(repo).history("not-an-address")
