"""Event storage: upsert, full listing and deletion over the events table.

One deployment serves a single variant. The variant decides which ORM model
backs the table, how incoming records are validated, and whether
``POST /api/send`` accepts a bare object in place of an array.

Batch upserts are best-effort: each record is validated and committed on its
own, so a bad record is logged and skipped without touching the others.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.climate_event import ClimateEventModel
from ..models.telemetry_event import TelemetryEventModel
from ..schemas.event import ClimateEventIn, TelemetryEventIn

logger = logging.getLogger(__name__)

_SQLITE_INT_MIN, _SQLITE_INT_MAX = -(2**63), 2**63 - 1


@dataclass(frozen=True)
class EventVariant:
    name: str
    model: type
    schema: type[BaseModel]
    key_type: type
    accepts_single: bool = False
    has_control: bool = False


VARIANTS: dict[str, EventVariant] = {
    "climate": EventVariant(
        name="climate",
        model=ClimateEventModel,
        schema=ClimateEventIn,
        key_type=str,
    ),
    "telemetry": EventVariant(
        name="telemetry",
        model=TelemetryEventModel,
        schema=TelemetryEventIn,
        key_type=int,
        accepts_single=True,
        has_control=True,
    ),
}


def get_variant(name: str) -> EventVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown event variant: {name!r}") from None


class BodyShapeError(ValueError):
    """Request body is neither a record array nor an accepted single record."""


def resolve_batch(payload: Any, variant: EventVariant) -> list[Any]:
    """Normalise a ``POST /api/send`` body to a list of raw records."""
    if isinstance(payload, list):
        return payload
    if variant.accepts_single and isinstance(payload, dict):
        return [payload]
    raise BodyShapeError("Expected an array of objects in the request body")


def _row_to_dict(row) -> dict:
    """Convert a SQLAlchemy model instance to a JSON-serialisable dict."""
    return {col.name: getattr(row, col.name) for col in row.__table__.columns}


def _record_key(record: Any) -> Any:
    return record.get("key") if isinstance(record, dict) else None


class EventStore:
    """Table operations for one variant, bound to a request's session."""

    def __init__(self, db: Session, variant: EventVariant) -> None:
        self.db = db
        self.variant = variant
        self.model = variant.model
        self._value_columns = [
            col.name for col in self.model.__table__.columns if not col.primary_key
        ]

    def upsert(self, record: Any) -> bool:
        """Insert ``record`` or replace every value column of the row sharing its key."""
        try:
            values = self.variant.schema.model_validate(record).model_dump()
        except ValidationError as e:
            logger.error(
                "Error inserting/updating data (key=%r): %d validation error(s): %s",
                _record_key(record), e.error_count(), e.errors(include_url=False),
            )
            return False

        stmt = sqlite_insert(self.model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={name: stmt.excluded[name] for name in self._value_columns},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            # sqlite3 raises a bare OverflowError for integers it cannot bind
            self.db.rollback()
            logger.error("Error inserting/updating data (key=%r): %s", values["key"], e)
            return False
        return True

    def upsert_many(self, records: list[Any]) -> list[bool]:
        """Upsert each record independently; one failure never stops the rest."""
        outcomes = [self.upsert(record) for record in records]
        failed = outcomes.count(False)
        if failed:
            logger.warning("Stored %d of %d records", len(outcomes) - failed, len(outcomes))
        else:
            logger.debug("Stored %d records", len(outcomes))
        return outcomes

    def list_all(self) -> list[dict]:
        return [_row_to_dict(row) for row in self.db.query(self.model).all()]

    def count(self) -> int:
        return self.db.query(self.model).count()

    def delete_by_key(self, key: Any) -> int:
        """Delete the row with ``key``. Returns the number of rows removed (0 or 1)."""
        if self.variant.key_type is int:
            try:
                key = int(key)
            except (TypeError, ValueError):
                return 0
            if not _SQLITE_INT_MIN <= key <= _SQLITE_INT_MAX:
                return 0
        try:
            deleted = (
                self.db.query(self.model)
                .filter(self.model.key == key)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return deleted

    def delete_all(self) -> int:
        try:
            deleted = self.db.query(self.model).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return deleted
