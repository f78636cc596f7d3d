from datetime import date

from healthdiary.auth import SessionContext
from healthdiary.services.dashboard import load_dashboard
from healthdiary.services import dashboard as dashboard_module
from healthdiary.exceptions import StoreError
from healthdiary.services.entries import EntryOrchestrator
from healthdiary.services.journal import add_journal_entry, create_journal


def test_anonymous_dashboard_is_empty():
    ctx = SessionContext()
    ctx.resolve(None)
    data = load_dashboard(ctx)
    assert data.health_entries == []
    assert data.stats.total_health_entries == 0
    assert data.notification is None


def test_dashboard_combines_sources(context, db):
    orch = EntryOrchestrator(context)
    orch.create({"entry_date": date(2025, 2, 1), "mood": "excellent", "sleep_hours": 8, "water_intake": 8, "exercise_minutes": 60})
    journal = create_journal(context.user_id, "Daily", db)
    for i in range(4):
        add_journal_entry(context.user_id, journal.id, f"t{i}", "a few words here", db)

    data = load_dashboard(context)
    assert data.stats.total_health_entries == 1
    assert data.stats.total_journals == 1
    assert data.stats.total_journal_entries == 4
    assert data.stats.streak_days == 1
    assert len(data.recent_entries) == 3
    assert data.notification is None


def test_failing_journal_source_degrades_to_empty(context, monkeypatch):
    def boom(*args, **kwargs):
        raise StoreError("journals table missing")

    monkeypatch.setattr(dashboard_module, "list_journals", boom)
    data = load_dashboard(context)
    assert data.journals == []
    assert data.stats.total_journals == 0
    assert data.notification is None


def test_failing_health_source_degrades_to_empty(context, db, monkeypatch):
    create_journal(context.user_id, "Daily", db)

    def boom(*args, **kwargs):
        raise StoreError("health_entries table missing")

    monkeypatch.setattr(dashboard_module, "list_entries", boom)
    data = load_dashboard(context)
    assert data.health_entries == []
    assert data.stats.total_health_entries == 0
    assert data.stats.total_journals == 1
    assert data.notification is None


def test_unexpected_failure_gives_one_notification(context, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("bad data")

    monkeypatch.setattr(dashboard_module, "summarize_dashboard", boom)
    data = load_dashboard(context)
    assert data.notification is not None
    assert data.notification.variant == "error"
    assert data.notification.description == "Failed to load dashboard data."
    assert data.health_entries == []
    assert data.stats.total_health_entries == 0
