"""ClimateEvent ORM model: humidity/temperature readings keyed by device key."""

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import ClimateBase


class ClimateEventModel(ClimateBase):
    __tablename__ = "events"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    datetime: Mapped[str] = mapped_column(Text, nullable=False)
