from datetime import date, datetime, timezone
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import EntryNotFoundError, InvalidEntryError, StoreError
from ..logging_config import get_logger
from ..models import HealthEntry

logger = get_logger(__name__)

EDITABLE_FIELDS = (
    "entry_date",
    "mood",
    "symptoms",
    "notes",
    "sleep_hours",
    "water_intake",
    "exercise_minutes",
)


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    # id, user_id and timestamps are never taken from client input
    clean = {k: v for k, v in (fields or {}).items() if k in EDITABLE_FIELDS}
    if isinstance(clean.get("entry_date"), str):
        try:
            clean["entry_date"] = date.fromisoformat(clean["entry_date"])
        except ValueError as e:
            raise InvalidEntryError(f"Invalid entry date: {clean['entry_date']!r}") from e
    return clean


def list_entries(user_id: int, db: Session):
    try:
        return (
            db.query(HealthEntry)
            .filter(HealthEntry.user_id == user_id)
            .order_by(HealthEntry.entry_date.desc(), HealthEntry.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Could not load health entries: {e}") from e


def get_entry(user_id: int, entry_id: int, db: Session):
    entry = (
        db.query(HealthEntry)
        .filter(HealthEntry.id == entry_id, HealthEntry.user_id == user_id)
        .first()
    )
    if entry is None:
        raise EntryNotFoundError(f"Health entry {entry_id} not found")
    return entry


def insert_entry(user_id: int, fields: Dict[str, Any], db: Session) -> HealthEntry:
    values = _clean_fields(fields)
    values.setdefault("entry_date", date.today())
    now = datetime.now(timezone.utc)
    entry = HealthEntry(user_id=user_id, created_at=now, updated_at=now, **values)
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not save health entry: {e}") from e
    logger.info("Inserted health entry %s for user %s", entry.id, user_id)
    return entry


def update_entry(user_id: int, entry_id: int, fields: Dict[str, Any], db: Session) -> HealthEntry:
    """Partial update: only the supplied fields change, plus updated_at."""
    values = _clean_fields(fields)
    try:
        entry = get_entry(user_id, entry_id, db)
        for key, value in values.items():
            setattr(entry, key, value)
        entry.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not update health entry: {e}") from e
    logger.info("Updated health entry %s (%s)", entry_id, ", ".join(sorted(values)) or "no fields")
    return entry


def delete_entry(user_id: int, entry_id: int, db: Session) -> None:
    try:
        entry = get_entry(user_id, entry_id, db)
        db.delete(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not delete health entry: {e}") from e
    logger.info("Deleted health entry %s", entry_id)
