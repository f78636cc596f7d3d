"""
Trend insights for the health log.

Rule-based observations are always produced; when a Gemini key is
configured they are also turned into a short encouraging summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from .gemini_client import call_gemini_text
from .stats import RECENT_WINDOW, SLEEP_TARGET_HOURS, WATER_TARGET_GLASSES, mean, mood_score, to_number

WEEKLY_EXERCISE_TARGET = 150
SLEEP_FLOOR_HOURS = 7
MOOD_TREND_DELTA = 0.5


@dataclass(frozen=True)
class Insight:
    key: str
    title: str
    message: str
    tone: str = "info"


def _window_avg(entries: Sequence[Any], attr: str) -> float:
    return mean([to_number(getattr(e, attr, None)) for e in entries])


def build_insights(entries: Sequence[Any]) -> List[Insight]:
    """Observations about the latest seven entries, compared with the seven before."""
    if not entries:
        return [Insight("empty", "Start tracking", "Log your first day to see trends here.")]

    recent = list(entries[:RECENT_WINDOW])
    previous = list(entries[RECENT_WINDOW:RECENT_WINDOW * 2])
    insights = []

    sleep = _window_avg(recent, "sleep_hours")
    if sleep < SLEEP_FLOOR_HOURS:
        insights.append(Insight(
            "sleep_low", "Sleep",
            f"You averaged {sleep:.1f}h of sleep recently. Aim for {SLEEP_FLOOR_HOURS}-{SLEEP_TARGET_HOURS}h.",
            "warning",
        ))
    else:
        insights.append(Insight("sleep_ok", "Sleep", f"Nice work, {sleep:.1f}h of sleep on average.", "success"))

    water = _window_avg(recent, "water_intake")
    if water < WATER_TARGET_GLASSES:
        insights.append(Insight(
            "water_low", "Hydration",
            f"{water:.1f} glasses a day on average. Try a glass with every meal to reach {WATER_TARGET_GLASSES}.",
            "warning",
        ))

    exercise = sum(to_number(getattr(e, "exercise_minutes", None)) for e in recent)
    if exercise < WEEKLY_EXERCISE_TARGET:
        insights.append(Insight(
            "exercise_low", "Movement",
            f"{exercise:.0f} active minutes across your last {len(recent)} entries. "
            f"{WEEKLY_EXERCISE_TARGET} minutes a week is a good target.",
            "warning",
        ))
    else:
        insights.append(Insight("exercise_ok", "Movement", f"{exercise:.0f} active minutes recently. Keep it up!", "success"))

    if previous:
        now = mean([mood_score(getattr(e, "mood", None)) for e in recent])
        before = mean([mood_score(getattr(e, "mood", None)) for e in previous])
        if now - before >= MOOD_TREND_DELTA:
            insights.append(Insight("mood_up", "Mood", "Your mood has been trending up.", "success"))
        elif before - now >= MOOD_TREND_DELTA:
            insights.append(Insight("mood_down", "Mood", "Your mood has dipped lately. Be gentle with yourself.", "warning"))
        else:
            insights.append(Insight("mood_steady", "Mood", "Your mood has been steady."))

    return insights


def fallback_summary(insights: Sequence[Insight]) -> str:
    warnings = [i.title.lower() for i in insights if i.tone == "warning"]
    if not warnings:
        return "You're on track across the board. Keep your routine going."
    return "Small focus areas this week: " + ", ".join(warnings) + "."


def summarize_insights(insights: Sequence[Insight]) -> str:
    """Short friendly summary; deterministic text when AI is unavailable."""
    lines = "\n".join(f"- {i.title}: {i.message}" for i in insights)
    prompt = (
        "You are a supportive wellness companion. In two sentences, summarize these "
        "health journal observations with one practical suggestion. No medical advice.\n\n"
        f"{lines}"
    )
    text = call_gemini_text(prompt)
    return text or fallback_summary(insights)
