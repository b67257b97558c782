#!/usr/bin/env python3
"""Seed a database with demo owners and weekly call schedules."""

import argparse
import asyncio
import random
import secrets

from callrates.models import KindPlan, ScheduleItem, ScheduleSubmission
from callrates.schedules import ScheduleService
from callrates.storage import StorageManager
from callrates.timecodec import to_hhmm, to_minutes

START_TIMES = ["08:00", "09:00", "10:30", "13:00", "15:00", "18:00", "20:30"]
DURATIONS = [30, 60, 90, 120]
PRICES_CENTS = [300, 500, 800, 1200, 2000]


def random_plan(slot_width: int) -> KindPlan:
    days = sorted(random.sample(range(1, 8), random.randint(1, 5)))
    items = []
    for day in days:
        start = random.choice(START_TIMES)
        duration = random.choice(DURATIONS)
        offsets = list(range(0, duration - slot_width + 1, slot_width))
        if offsets and random.random() < 0.3:
            base = to_minutes(start)
            picks = sorted(random.sample(offsets, min(3, len(offsets))))
            slots = [to_hhmm(base + p) for p in picks]
        else:
            slots = []
        items.append(ScheduleItem(day=day, start=start, duration=duration, slots=slots))
    return KindPlan(price_cents=random.choice(PRICES_CENTS), items=items)


async def seed_owner(service: ScheduleService, owner: str, submissions: int, slot_width: int) -> int:
    inserted = 0
    for _ in range(submissions):
        req = ScheduleSubmission(
            owner=owner,
            slot_width_minutes=slot_width,
            voice=random_plan(slot_width) if random.random() < 0.8 else None,
            video=random_plan(slot_width) if random.random() < 0.6 else None,
        )
        if req.voice is None and req.video is None:
            req.voice = random_plan(slot_width)
        inserted += await service.submit(req)
    return inserted


async def main():
    parser = argparse.ArgumentParser(description="Seed demo call schedules")
    parser.add_argument("--owners", type=int, default=20, help="Number of owner addresses")
    parser.add_argument("--submissions", type=int, default=3, help="Submissions per owner")
    parser.add_argument("--slot-width", type=int, default=10, help="Slot width in minutes")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--db", type=str, default="data/callrates.db", help="Database path")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    print(f"Connecting to database: {args.db}")
    storage = StorageManager(args.db)
    await storage.initialize()
    service = ScheduleService(storage.schedules)

    try:
        owners = ["0x" + secrets.token_hex(20) for _ in range(args.owners)]
        total = 0
        for owner in owners:
            total += await seed_owner(service, owner, args.submissions, args.slot_width)
        print(f"Inserted {total} schedule rows for {len(owners)} owners")

        print("\n=== Summary ===")
        print(f"Owners: {await storage.schedules.count_owners():,}")
        print(f"Rows:   {await storage.schedules.count():,}")
        print(f"Example owner: {owners[0]}")
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(main())
