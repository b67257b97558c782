"""Overview router - service banner, health and row counts."""

from fastapi import APIRouter, HTTPException
from starlette.requests import Request

from callrates import __version__
from callrates.deps import get_server
from callrates.errors import StoreError

router = APIRouter()


@router.get("/")
async def root(request: Request):
    srv = get_server(request)
    return {
        "service": "Call Rates Scheduler",
        "version": __version__,
        "api_port": srv.api_port,
    }


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/status")
async def server_status(request: Request):
    srv = get_server(request)
    try:
        return {
            "owners": await srv.storage.schedules.count_owners(),
            "schedule_rows": await srv.storage.schedules.count(),
        }
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
