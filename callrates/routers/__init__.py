"""Router package - collects all API routers and registers them on the FastAPI app."""

from fastapi import FastAPI

from callrates.routers import overview, schedules


def register_all_routers(app: FastAPI):
    app.include_router(overview.router)
    app.include_router(schedules.router)
