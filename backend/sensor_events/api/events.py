"""POST /api/send - Upsert a batch of event records.
   GET /api/events - All stored events.
   DELETE /api/events/{key} - Remove one event.
   DELETE /api/events - Remove every event.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..schemas.event import ErrorResponse, MessageResponse
from ..services.event_store import BodyShapeError, EventStore, resolve_batch
from .dependencies import get_event_store

logger = logging.getLogger(__name__)
router = APIRouter(tags=["events"])


def _storage_error(error: str, exc: SQLAlchemyError) -> JSONResponse:
    # Report the driver's message rather than SQLAlchemy's wrapper text
    details = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(status_code=500, content={"error": error, "details": details})


@router.post("/send", response_model=MessageResponse, responses={400: {"model": ErrorResponse}})
def send_events(payload: Any = Body(None), store: EventStore = Depends(get_event_store)):
    """Insert or update each record; individual failures are only logged."""
    try:
        records = resolve_batch(payload, store.variant)
    except BodyShapeError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    store.upsert_many(records)
    return {"message": "Data stored successfully"}


@router.get("/events", responses={500: {"model": ErrorResponse}})
def list_events(store: EventStore = Depends(get_event_store)):
    try:
        return store.list_all()
    except SQLAlchemyError as e:
        logger.error("Error reading events: %s", e)
        return _storage_error("Database error", e)


@router.delete(
    "/events/{key}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}, 500: {"model": ErrorResponse}},
)
def delete_event(key: str, store: EventStore = Depends(get_event_store)):
    try:
        deleted = store.delete_by_key(key)
    except SQLAlchemyError as e:
        logger.error("Error deleting event %r: %s", key, e)
        return _storage_error("Failed to delete data", e)

    if deleted == 0:
        return JSONResponse(
            status_code=404, content={"message": "No event found with the given key"},
        )
    logger.info("Deleted event %r", key)
    return {"message": f"Event with key '{key}' deleted successfully"}


@router.delete("/events", response_model=MessageResponse, responses={500: {"model": ErrorResponse}})
def delete_all_events(store: EventStore = Depends(get_event_store)):
    try:
        deleted = store.delete_all()
    except SQLAlchemyError as e:
        logger.error("Error deleting all events: %s", e)
        return _storage_error("Failed to delete all data", e)

    logger.info("Deleted all events (%d rows)", deleted)
    return {"message": "All events deleted successfully"}
