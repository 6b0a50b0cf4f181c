"""POST /api/control - Set the on/off control flag.
   GET /api/control/status - Current flag value.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ..schemas.control import ControlStatusResponse
from ..services.control import ControlState, InvalidControlStatus
from .dependencies import get_control_state

router = APIRouter(tags=["control"])


@router.post("/control", response_model=ControlStatusResponse)
def update_control(
    payload: Any = Body(None),
    control: ControlState = Depends(get_control_state),
):
    status = payload.get("status") if isinstance(payload, dict) else None
    try:
        control.set(status)
    except InvalidControlStatus:
        return JSONResponse(status_code=400, content={"error": "Status must be 'on' or 'off'"})
    return {"status": status}


@router.get("/control/status", response_model=ControlStatusResponse)
def get_control_status(control: ControlState = Depends(get_control_state)):
    return {"status": control.status}
