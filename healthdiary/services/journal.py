import math
import re
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import EntryNotFoundError, StoreError
from ..logging_config import get_logger
from ..models import Journal, JournalEntry

logger = get_logger(__name__)

WORDS_PER_MINUTE = 200
RECENT_PER_JOURNAL = 3
RECENT_LIMIT = 5

TAG_RE = re.compile(r"<[^>]*>")


def strip_html(content: str) -> str:
    return TAG_RE.sub(" ", content or "")


def preview_text(content: str, max_chars: int = 160) -> str:
    text = " ".join(strip_html(content).split())
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "…"


def count_words(content: str) -> int:
    return len(strip_html(content).split())


def reading_time(word_count: int) -> int:
    """Minutes to read at 200 wpm; any non-empty text takes at least a minute."""
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def _commit(db: Session, what: str, refresh=None):
    try:
        db.commit()
        if refresh is not None:
            db.refresh(refresh)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not {what}: {e}") from e


def _delete(db: Session, obj, what: str):
    try:
        # deleting a journal loads its entries for the cascade
        db.delete(obj)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not {what}: {e}") from e


def create_journal(user_id: int, name: str, db: Session, description: str = None) -> Journal:
    journal = Journal(
        user_id=user_id,
        name=(name or "").strip() or "Untitled Journal",
        description=description,
        created_at=datetime.now(timezone.utc),
    )
    db.add(journal)
    _commit(db, "create journal", refresh=journal)
    logger.info("Created journal %s for user %s", journal.id, user_id)
    return journal


def list_journals(user_id: int, db: Session):
    try:
        return (
            db.query(Journal)
            .filter(Journal.user_id == user_id)
            .order_by(Journal.created_at.desc(), Journal.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Could not load journals: {e}") from e


def get_journal(user_id: int, journal_id: int, db: Session) -> Journal:
    try:
        journal = db.query(Journal).filter(Journal.id == journal_id, Journal.user_id == user_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not load journal: {e}") from e
    if journal is None:
        raise EntryNotFoundError(f"Journal {journal_id} not found")
    return journal


def rename_journal(user_id: int, journal_id: int, name: str, db: Session, description: str = None) -> Journal:
    journal = get_journal(user_id, journal_id, db)
    journal.name = (name or "").strip() or journal.name
    if description is not None:
        journal.description = description
    _commit(db, "rename journal", refresh=journal)
    return journal


def delete_journal(user_id: int, journal_id: int, db: Session) -> None:
    journal = get_journal(user_id, journal_id, db)
    _delete(db, journal, "delete journal")
    logger.info("Deleted journal %s and its entries", journal_id)


def add_journal_entry(user_id: int, journal_id: int, title: str, content: str, db: Session, mood: str = None) -> JournalEntry:
    get_journal(user_id, journal_id, db)
    words = count_words(content)
    now = datetime.now(timezone.utc)
    entry = JournalEntry(
        journal_id=journal_id,
        user_id=user_id,
        title=(title or "").strip(),
        content=content or "",
        word_count=words,
        reading_time=reading_time(words),
        mood=mood or None,
        created_at=now,
        updated_at=now,
    )
    db.add(entry)
    _commit(db, "save journal entry", refresh=entry)
    return entry


def get_journal_entry(user_id: int, entry_id: int, db: Session) -> JournalEntry:
    try:
        entry = db.query(JournalEntry).filter(JournalEntry.id == entry_id, JournalEntry.user_id == user_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(f"Could not load journal entry: {e}") from e
    if entry is None:
        raise EntryNotFoundError(f"Journal entry {entry_id} not found")
    return entry


def update_journal_entry(user_id: int, entry_id: int, db: Session, title: str = None, content: str = None, mood: str = None) -> JournalEntry:
    entry = get_journal_entry(user_id, entry_id, db)
    if title is not None:
        entry.title = title.strip()
    if content is not None:
        entry.content = content
        entry.word_count = count_words(content)
        entry.reading_time = reading_time(entry.word_count)
    if mood is not None:
        entry.mood = mood or None
    entry.updated_at = datetime.now(timezone.utc)
    _commit(db, "update journal entry", refresh=entry)
    return entry


def delete_journal_entry(user_id: int, entry_id: int, db: Session) -> None:
    entry = get_journal_entry(user_id, entry_id, db)
    _delete(db, entry, "delete journal entry")


def list_journal_entries(journal_id: int, db: Session, limit=None):
    try:
        query = (
            db.query(JournalEntry)
            .filter(JournalEntry.journal_id == journal_id)
            .order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()
    except SQLAlchemyError as e:
        raise StoreError(f"Could not load journal entries: {e}") from e


def count_journal_entries(user_id: int, db: Session) -> int:
    try:
        return db.query(JournalEntry).filter(JournalEntry.user_id == user_id).count()
    except SQLAlchemyError as e:
        raise StoreError(f"Could not count journal entries: {e}") from e


def recent_journal_entries(user_id: int, db: Session, journals=None):
    """Newest few entries from each journal, merged and cut to the latest five."""
    if journals is None:
        journals = list_journals(user_id, db)
    merged = []
    for journal in journals:
        merged.extend(list_journal_entries(journal.id, db, limit=RECENT_PER_JOURNAL))
    merged.sort(key=lambda e: (_sort_time(e.created_at), e.id), reverse=True)
    return merged[:RECENT_LIMIT]


def _sort_time(value):
    # SQLite hands back naive datetimes even for timezone=True columns
    if value is None:
        return datetime.min
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
