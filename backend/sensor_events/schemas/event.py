"""Pydantic schemas for incoming event records and API responses."""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Range of a SQLite INTEGER column; wider values cannot be bound
SqliteInt = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class ClimateEventIn(BaseModel):
    # inf/nan would be stored but could never be serialised back as JSON
    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    key: str
    humidity: float
    temperature: float
    timestamp: SqliteInt
    datetime: str


class TelemetryEventIn(BaseModel):
    # Firmware sends readings as numbers or strings depending on the sketch
    model_config = ConfigDict(coerce_numbers_to_str=True)

    key: SqliteInt
    ldr_status: Optional[str] = None
    distance_cm: Optional[str] = None
    servo_position: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
