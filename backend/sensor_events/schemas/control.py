"""Pydantic schemas for the control flag API."""

from typing import Literal

from pydantic import BaseModel


class ControlStatusResponse(BaseModel):
    status: Literal["on", "off"]
