"""TelemetryEvent ORM model: LDR, ultrasonic distance and servo telemetry."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import TelemetryBase


class TelemetryEventModel(TelemetryBase):
    __tablename__ = "events"

    key: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    # Devices report these as free-form strings ("HIGH", "23.4", "90")
    ldr_status: Mapped[str | None] = mapped_column(Text, nullable=True)
    distance_cm: Mapped[str | None] = mapped_column(Text, nullable=True)
    servo_position: Mapped[str | None] = mapped_column(Text, nullable=True)
