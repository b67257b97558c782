"""Dependency helpers for router modules."""

from starlette.requests import Request

from callrates.availability import AvailabilityResolver
from callrates.schedules import ScheduleService


def get_server(request: Request):
    return request.app.state.server


def get_schedule_service(request: Request) -> ScheduleService:
    return get_server(request).schedules


def get_resolver(request: Request) -> AvailabilityResolver:
    return get_server(request).availability
