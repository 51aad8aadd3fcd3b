#!/usr/bin/env python3
"""
Minimal HTTP surface over the store, handy for poking at the round-trip
from curl with different ``zone`` / ``offset`` query parameters.

    uvicorn --factory tzroundtrip.main:create_app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .bootstrap import create_db_engine, init_tzroundtrip
from .core.record import TimestampRecord
from .errors import DateTimeParseError, UnknownZoneError
from .logconfig import configure_logging
from .persistence.store import TimestampStore

logger = structlog.get_logger(__name__)


class RecordIn(BaseModel):
    """Either just the zoned value, or all three as strings."""

    timestamp_with_zone: str
    timestamp_without_zone: Optional[str] = None
    timestamp_with_utc_offset: Optional[str] = None


def create_app(store: TimestampStore | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is None:
            configure_logging()
            app.state.store = init_tzroundtrip(create_db_engine())
        else:
            app.state.store = store
        logger.info("api_starting")
        yield
        logger.info("api_stopping")

    app = FastAPI(title="tzroundtrip", lifespan=lifespan)

    @app.exception_handler(DateTimeParseError)
    @app.exception_handler(UnknownZoneError)
    async def _bad_input(request: Request, exc: ValueError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/")
    def health(request: Request) -> Dict[str, Any]:
        return {"status": "running", "records": request.app.state.store.count()}

    @app.post("/records", status_code=201)
    def create_record(body: RecordIn, request: Request) -> Dict[str, int]:
        try:
            if body.timestamp_without_zone is None and body.timestamp_with_utc_offset is None:
                rec = TimestampRecord.from_zoned(body.timestamp_with_zone)
            else:
                rec = TimestampRecord(**body.model_dump())
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {"id": request.app.state.store.store(rec)}

    @app.get("/records")
    def list_records(
        request: Request, zone: Optional[str] = None, offset: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        recs = request.app.state.store.fetch_all(zone=zone, offset=offset)
        return [r.display() for r in recs]

    @app.get("/records/{rec_id}")
    def get_record(
        rec_id: int,
        request: Request,
        zone: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> Dict[str, Any]:
        rec = request.app.state.store.fetch_by_id(rec_id, zone=zone, offset=offset)
        if rec is None:
            raise HTTPException(status_code=404, detail=f"record {rec_id} not found")
        return rec.display()

    @app.delete("/records/{rec_id}", status_code=204)
    def delete_record(rec_id: int, request: Request) -> Response:
        if not request.app.state.store.delete(rec_id):
            raise HTTPException(status_code=404, detail=f"record {rec_id} not found")
        return Response(status_code=204)

    return app


def main() -> None:
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
