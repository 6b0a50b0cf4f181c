"""Top-level API router aggregation."""

from fastapi import APIRouter

from ..services.event_store import EventVariant
from . import control, events


def build_api_router(variant: EventVariant) -> APIRouter:
    """Assemble the /api routes served by ``variant``."""
    api_router = APIRouter(prefix="/api")
    api_router.include_router(events.router)
    if variant.has_control:
        api_router.include_router(control.router)
    return api_router
