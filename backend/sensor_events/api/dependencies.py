"""Request-scoped dependencies shared by the API routers.

Per-app objects (session factory, variant, control flag) are attached to
``app.state`` by ``create_app`` and handed to endpoints from here.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..models.database import get_db
from ..services.control import ControlState
from ..services.event_store import EventStore


def get_event_store(request: Request, db: Session = Depends(get_db)) -> EventStore:
    return EventStore(db, request.app.state.variant)


def get_control_state(request: Request) -> ControlState:
    control = getattr(request.app.state, "control", None)
    if control is None:
        raise RuntimeError("Control flag not initialised for this variant")
    return control
