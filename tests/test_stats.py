from types import SimpleNamespace

from healthdiary.services.stats import (
    health_score,
    health_score_band,
    mood_score,
    round_one_decimal,
    summarize_dashboard,
    summarize_recent,
)


def make_entry(sleep=0, water=0, exercise=0, mood="neutral"):
    return SimpleNamespace(sleep_hours=sleep, water_intake=water, exercise_minutes=exercise, mood=mood)


def test_empty_overview():
    stats = summarize_recent([])
    assert stats.sleep_label == "0.0h"
    assert stats.water_label == "0.0"
    assert stats.avg_exercise == 0
    assert stats.total_entries == 0
    # avg mood falls back to 3 -> 3/5 * 30
    assert stats.avg_mood == 3.0
    assert stats.health_score == 18


def test_overview_uses_first_seven_entries_only():
    sleeps = [8, 7, 6, 9, 5, 8, 7, 4, 4, 4]
    entries = [make_entry(sleep=s) for s in sleeps]
    stats = summarize_recent(entries)
    assert stats.sleep_label == "7.1h"
    assert stats.total_entries == 10


def test_overview_does_not_mutate_or_resort():
    entries = [make_entry(sleep=1), make_entry(sleep=9)]
    snapshot = list(entries)
    summarize_recent(entries)
    assert entries == snapshot


def test_exercise_rounds_half_up():
    entries = [make_entry(exercise=30), make_entry(exercise=31)]
    assert summarize_recent(entries).avg_exercise == 31
    assert summarize_recent(entries).exercise_label == "31 min"


def test_water_average_one_decimal():
    entries = [make_entry(water=8), make_entry(water=7), make_entry(water=6)]
    stats = summarize_recent(entries)
    assert stats.avg_water == 7.0
    assert stats.cards()[1] == {"title": "Avg Water", "value": "7.0 glasses"}


def test_missing_numbers_count_as_zero():
    entries = [make_entry(sleep=None, water="abc", exercise=None), make_entry(sleep=8, water=4, exercise=20)]
    stats = summarize_recent(entries)
    assert stats.avg_sleep == 4.0
    assert stats.avg_water == 2.0
    assert stats.avg_exercise == 10


def test_mood_mapping_is_total():
    assert [mood_score(m) for m in ["excellent", "good", "neutral", "poor", "terrible"]] == [5, 4, 3, 2, 1]
    assert mood_score("ecstatic") == 3
    assert mood_score(None) == 3
    assert mood_score(42) == 3
    assert mood_score(" Good ") == 4


def test_unknown_mood_contributes_three():
    stats = summarize_dashboard([make_entry(mood="excellent"), make_entry(mood="???"), make_entry(mood=None)])
    assert stats.avg_mood == (5 + 3 + 3) / 3


def test_health_score_bounds():
    for mood in (1, 3, 5):
        for sleep in (0, 4, 8, 14):
            for exercise in (0, 700, 1500, 5000):
                for water in (0, 4, 8, 20):
                    assert 0 <= health_score(mood, sleep, exercise, water) <= 100
    assert health_score(5, 8, 1500, 8) == 100
    assert health_score(0, 0, 0, 0) == 0
    assert health_score(-5, -1, -100, -3) == 0


def test_health_score_formula():
    # 4/5*30 + 6/8*25 + 750/1500*25 + 6/8*20 = 24 + 18.75 + 12.5 + 15
    assert health_score(4, 6, 750, 6) == 70


def test_dashboard_stats_over_all_entries():
    entries = [make_entry(sleep=8, water=8, exercise=100, mood="good") for _ in range(40)]
    stats = summarize_dashboard(entries, journals=[object(), object()], journal_entries=[1, 2, 3])
    assert stats.total_health_entries == 40
    assert stats.streak_days == 30
    assert stats.total_journals == 2
    assert stats.total_journal_entries == 3
    assert stats.total_exercise == 4000
    assert stats.health_score == 24 + 25 + 25 + 20


def test_dashboard_stats_empty():
    stats = summarize_dashboard([])
    assert stats.avg_mood == 3.0
    assert stats.avg_sleep == 0
    assert stats.streak_days == 0
    assert stats.health_score == 18
    assert stats.band == "low"


def test_score_bands():
    assert health_score_band(80) == "good"
    assert health_score_band(79) == "fair"
    assert health_score_band(60) == "fair"
    assert health_score_band(59) == "low"


def test_one_decimal_averages_round_ties_up():
    entries = [make_entry(sleep=7, water=7), make_entry(sleep=7.5, water=7.5)]
    stats = summarize_recent(entries)
    assert stats.sleep_label == "7.3h"
    assert stats.water_label == "7.3"


def test_one_decimal_rounding_follows_float_value():
    # 0.15 is stored as 0.1499..., so it rounds down like toFixed does
    assert round_one_decimal(0.15) == 0.1
    assert round_one_decimal(0.25) == 0.3
    assert round_one_decimal(7.142857) == 7.1
