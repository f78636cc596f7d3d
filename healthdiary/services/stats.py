"""
Dashboard statistics.

Everything here is a pure function of the entries passed in: nothing is
queried, nothing is mutated, and empty input produces fully defined zero or
default values instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Sequence

MOOD_SCORES = {
    "excellent": 5,
    "good": 4,
    "neutral": 3,
    "poor": 2,
    "terrible": 1,
}
DEFAULT_MOOD_SCORE = 3
MOODS = list(MOOD_SCORES)

RECENT_WINDOW = 7
STREAK_CAP_DAYS = 30

SLEEP_TARGET_HOURS = 8
WATER_TARGET_GLASSES = 8
EXERCISE_TARGET_MINUTES = 1500


def mood_score(mood: Any) -> int:
    """Map a mood label to 1-5. Unknown or missing moods score as neutral."""
    if not isinstance(mood, str):
        return DEFAULT_MOOD_SCORE
    return MOOD_SCORES.get(mood.strip().lower(), DEFAULT_MOOD_SCORE)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    # ties go up, on the exact binary value of the float
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def to_number(value: Any) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(n) or math.isinf(n):
        return 0.0
    return n


def mean(values: Sequence[float], default: float = 0.0) -> float:
    if not values:
        return default
    return sum(values) / len(values)


def health_score(avg_mood: float, avg_sleep: float, total_exercise: float, avg_water: float) -> int:
    """
    Composite 0-100 score.

    Mood contributes 30 points, sleep 25 against an 8h target, exercise 25
    against 1500 total minutes and water 20 against 8 glasses.
    """
    mood_part = min(max(to_number(avg_mood), 0) / 5, 1) * 30
    sleep_part = min(max(to_number(avg_sleep), 0) / SLEEP_TARGET_HOURS, 1) * 25
    exercise_part = min(max(to_number(total_exercise), 0) / EXERCISE_TARGET_MINUTES, 1) * 25
    water_part = min(max(to_number(avg_water), 0) / WATER_TARGET_GLASSES, 1) * 20
    score = round_half_up(mood_part + sleep_part + exercise_part + water_part)
    return max(0, min(100, score))


def health_score_band(score: int) -> str:
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    return "low"


@dataclass(frozen=True)
class OverviewStats:
    avg_sleep: float
    avg_water: float
    avg_exercise: int
    avg_mood: float
    total_exercise: float
    total_entries: int
    health_score: int

    @property
    def sleep_label(self) -> str:
        return f"{self.avg_sleep:.1f}h"

    @property
    def water_label(self) -> str:
        return f"{self.avg_water:.1f}"

    @property
    def exercise_label(self) -> str:
        return f"{self.avg_exercise} min"

    def cards(self) -> list[dict]:
        """Title/value pairs for the four overview cards."""
        return [
            {"title": "Avg Sleep", "value": self.sleep_label},
            {"title": "Avg Water", "value": f"{self.water_label} glasses"},
            {"title": "Avg Exercise", "value": self.exercise_label},
            {"title": "Total Entries", "value": str(self.total_entries)},
        ]


@dataclass(frozen=True)
class DashboardStats:
    total_health_entries: int
    total_journals: int
    total_journal_entries: int
    streak_days: int
    avg_mood: float
    avg_sleep: float
    avg_water: float
    total_exercise: float
    health_score: int

    @property
    def band(self) -> str:
        return health_score_band(self.health_score)


def summarize_recent(entries: Sequence[Any]) -> OverviewStats:
    """
    Averages over the most recent entries.

    The window is the first seven items as given; callers pass entries
    already ordered newest first and nothing is re-sorted here, so date gaps
    widen the window beyond a calendar week.
    """
    window = list(entries[:RECENT_WINDOW])
    sleep = [to_number(getattr(e, "sleep_hours", None)) for e in window]
    water = [to_number(getattr(e, "water_intake", None)) for e in window]
    exercise = [to_number(getattr(e, "exercise_minutes", None)) for e in window]
    moods = [mood_score(getattr(e, "mood", None)) for e in window]

    avg_sleep = round_one_decimal(mean(sleep))
    avg_water = round_one_decimal(mean(water))
    avg_mood = mean(moods, float(DEFAULT_MOOD_SCORE))
    total_exercise = sum(exercise)

    return OverviewStats(
        avg_sleep=avg_sleep,
        avg_water=avg_water,
        avg_exercise=round_half_up(mean(exercise)),
        avg_mood=avg_mood,
        total_exercise=total_exercise,
        total_entries=len(entries),
        health_score=health_score(avg_mood, avg_sleep, total_exercise, avg_water),
    )


def summarize_dashboard(
    health_entries: Sequence[Any],
    journals: Optional[Sequence[Any]] = None,
    journal_entries: Optional[Iterable[Any]] = None,
    *,
    journal_entry_count: Optional[int] = None,
) -> DashboardStats:
    """Whole-history stats for the unified dashboard."""
    total = len(health_entries)
    avg_mood = mean([mood_score(getattr(e, "mood", None)) for e in health_entries], float(DEFAULT_MOOD_SCORE))
    avg_sleep = mean([to_number(getattr(e, "sleep_hours", None)) for e in health_entries])
    avg_water = mean([to_number(getattr(e, "water_intake", None)) for e in health_entries])
    total_exercise = sum(to_number(getattr(e, "exercise_minutes", None)) for e in health_entries)

    return DashboardStats(
        total_health_entries=total,
        total_journals=len(journals or []),
        total_journal_entries=(
            journal_entry_count if journal_entry_count is not None else len(list(journal_entries or []))
        ),
        streak_days=min(total, STREAK_CAP_DAYS),
        avg_mood=avg_mood,
        avg_sleep=avg_sleep,
        avg_water=avg_water,
        total_exercise=total_exercise,
        health_score=health_score(avg_mood, avg_sleep, total_exercise, avg_water),
    )
