from datetime import datetime, timedelta

import pytest
from healthdiary.db import engine
from healthdiary.exceptions import EntryNotFoundError, StoreError
from healthdiary.models import Journal, JournalEntry
from healthdiary.services.journal import (
    add_journal_entry,
    count_words,
    create_journal,
    delete_journal,
    delete_journal_entry,
    list_journal_entries,
    list_journals,
    preview_text,
    reading_time,
    recent_journal_entries,
    rename_journal,
    update_journal_entry,
)


def test_word_count_strips_html():
    assert count_words("<p>Hello <b>big</b> world</p>") == 3
    assert count_words("") == 0
    assert count_words(None) == 0


def test_reading_time():
    assert reading_time(0) == 0
    assert reading_time(1) == 1
    assert reading_time(200) == 1
    assert reading_time(201) == 2


def test_preview_text():
    assert preview_text("<p>Line one</p><p>Line two</p>") == "Line one Line two"
    assert preview_text("word " * 100, max_chars=10).endswith("…")


def test_journal_crud(identity, db):
    journal = create_journal(identity.id, "  Morning pages ", db)
    assert journal.name == "Morning pages"
    entry = add_journal_entry(identity.id, journal.id, "Day one", "<p>" + "word " * 250 + "</p>", db, mood="good")
    assert entry.word_count == 250
    assert entry.reading_time == 2

    updated = update_journal_entry(identity.id, entry.id, db, content="short note")
    assert updated.word_count == 2
    assert updated.reading_time == 1
    assert updated.title == "Day one"

    renamed = rename_journal(identity.id, journal.id, "Evening pages", db)
    assert renamed.name == "Evening pages"

    delete_journal(identity.id, journal.id, db)
    assert list_journals(identity.id, db) == []
    assert db.query(JournalEntry).count() == 0


def test_entry_requires_owned_journal(identity, db):
    with pytest.raises(EntryNotFoundError):
        add_journal_entry(identity.id, 999, "t", "c", db)


def test_recent_entries_three_per_journal_five_total(identity, db):
    base = datetime(2025, 1, 1, 8, 0)
    first = create_journal(identity.id, "A", db)
    second = create_journal(identity.id, "B", db)
    minute = 0
    for journal in (first, second):
        for i in range(4):
            entry = add_journal_entry(identity.id, journal.id, f"{journal.name}{i}", "text", db)
            entry.created_at = base + timedelta(minutes=minute)
            minute += 1
    db.commit()

    assert len(list_journal_entries(first.id, db)) == 4
    recent = recent_journal_entries(identity.id, db)
    assert [e.title for e in recent] == ["B3", "B2", "B1", "A3", "A2"]


def test_missing_journal_table_raises_store_error(identity, db):
    journal_id = create_journal(identity.id, "Daily", db).id
    Journal.__table__.drop(bind=engine)
    with pytest.raises(StoreError):
        delete_journal(identity.id, journal_id, db)
    with pytest.raises(StoreError):
        add_journal_entry(identity.id, journal_id, "t", "c", db)


def test_missing_entry_table_raises_store_error(identity, db):
    journal = create_journal(identity.id, "Daily", db)
    entry_id = add_journal_entry(identity.id, journal.id, "t", "c", db).id
    JournalEntry.__table__.drop(bind=engine)
    with pytest.raises(StoreError):
        update_journal_entry(identity.id, entry_id, db, title="new")
    with pytest.raises(StoreError):
        delete_journal_entry(identity.id, entry_id, db)


def test_rename_and_edit_unknown_ids(identity, db):
    with pytest.raises(EntryNotFoundError):
        rename_journal(identity.id, 999, "x", db)
    with pytest.raises(EntryNotFoundError):
        update_journal_entry(identity.id, 999, db, title="x")
