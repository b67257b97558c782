"""
server.py - Call rates server entry point.

Single-process server combining:
 - SQLite persistent storage via StorageManager
 - Schedule submission and availability services
 - REST API (FastAPI on uvicorn, port 8080)

Usage:
    python -m callrates.server [--api-port 8080] [--db-path data/callrates.db]
    callrates-server [--host 0.0.0.0] [--api-port 8080] [--log-level INFO]
"""

import argparse
import asyncio
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from callrates import __version__
from callrates.availability import AvailabilityResolver
from callrates.routers import register_all_routers
from callrates.schedules import ScheduleService
from callrates.storage import StorageManager

LOG_FORMAT = "%(asctime)s [%(name)-10s] %(levelname)-5s %(message)s"

logger = logging.getLogger("server")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


async def _request_validation_error(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with the first problem found."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{loc}: {first.get('msg', 'invalid')}" if loc else first.get("msg", "invalid")
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


class CallRatesServer:
    """Owns the storage connection and the services the routers reach via app.state."""

    def __init__(self, host: str = "0.0.0.0", api_port: int = 8080,
                 db_path: str = "data/callrates.db",
                 storage: Optional[StorageManager] = None):
        self.host = host
        self.api_port = api_port
        self.db_path = db_path

        # Storage + services are initialized async in init_services()
        self.storage: Optional[StorageManager] = storage
        self._owns_storage = storage is None
        self.schedules: Optional[ScheduleService] = None
        self.availability: Optional[AvailabilityResolver] = None

        self.app = FastAPI(title="Call Rates Scheduler", version=__version__)
        self.app.state.server = self
        self.app.add_exception_handler(RequestValidationError, _request_validation_error)
        register_all_routers(self.app)

        self._uvicorn_server: Optional[uvicorn.Server] = None

    async def init_services(self):
        """Open storage (unless one was supplied) and wire up services."""
        if self.storage is None:
            db_dir = os.path.dirname(self.db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
            self.storage = StorageManager(self.db_path)
            await self.storage.initialize()

        self.schedules = ScheduleService(self.storage.schedules)
        self.availability = AvailabilityResolver(self.storage.schedules)

        logger.info("Services initialized (db=%s)", self.storage.db_path)

    async def start(self):
        """Start storage and the API server."""
        await self.init_services()

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.api_port,
            log_level="info",
        )
        self._uvicorn_server = uvicorn.Server(config)
        logger.info("REST API starting on port %d", self.api_port)
        try:
            await self._uvicorn_server.serve()
        finally:
            await self.stop()

    async def stop(self):
        """Stop the API server and close storage we opened."""
        if self._uvicorn_server:
            self._uvicorn_server.should_exit = True
        if self.storage and self._owns_storage:
            await self.storage.close()


def main():
    """CLI entry point for the call rates server."""
    parser = argparse.ArgumentParser(description="Call Rates Scheduler Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--api-port", type=int, default=8080, help="REST API port (default: 8080)")
    parser.add_argument("--db-path", default="data/callrates.db", help="SQLite database path (default: data/callrates.db)")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    configure_logging(args.log_level)

    server = CallRatesServer(host=args.host, api_port=args.api_port, db_path=args.db_path)

    logger.info("=" * 60)
    logger.info("  Call Rates Scheduler")
    logger.info("  REST API:    http://localhost:%d", args.api_port)
    logger.info("  Database:    %s", args.db_path)
    logger.info("=" * 60)

    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
