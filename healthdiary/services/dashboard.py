from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from sqlalchemy.orm import Session

from ..auth import SessionContext
from ..db import SessionLocal
from ..exceptions import StoreError
from ..logging_config import get_logger
from ..notifications import Notification, error
from .health_entries import list_entries
from .journal import count_journal_entries, list_journals, recent_journal_entries
from .stats import DashboardStats, summarize_dashboard

logger = get_logger(__name__)

EMPTY_STATS = summarize_dashboard([])


@dataclass
class DashboardData:
    health_entries: List[Any] = field(default_factory=list)
    journals: List[Any] = field(default_factory=list)
    recent_entries: List[Any] = field(default_factory=list)
    stats: DashboardStats = EMPTY_STATS
    notification: Optional[Notification] = None


def load_dashboard(context: SessionContext, session_factory: Callable[[], Session] = SessionLocal) -> DashboardData:
    """
    Load everything the signed-in home page shows.

    Each source degrades to empty on its own so one failing query does not
    blank the whole dashboard.
    """
    if not context.loaded or context.identity is None:
        return DashboardData()

    user_id = context.user_id
    db = session_factory()
    try:
        try:
            health = list_entries(user_id, db)
        except StoreError as e:
            logger.warning("Health entries unavailable for user %s: %s", user_id, e)
            health = []

        try:
            journals = list_journals(user_id, db)
            recent = recent_journal_entries(user_id, db, journals=journals)
            journal_entry_total = count_journal_entries(user_id, db)
        except StoreError as e:
            logger.warning("Journals unavailable for user %s: %s", user_id, e)
            journals, recent, journal_entry_total = [], [], 0

        stats = summarize_dashboard(health, journals, journal_entry_count=journal_entry_total)
        return DashboardData(health_entries=health, journals=journals, recent_entries=recent, stats=stats)
    except Exception:
        logger.exception("Dashboard load failed for user %s", user_id)
        return DashboardData(notification=error("Failed to load dashboard data."))
    finally:
        db.close()
