"""
Tests for leaderboard ordering and tie-breaks
"""
import itertools
from datetime import datetime, timedelta

import pytest

from livequiz.errors import InvalidRound
from livequiz.models import ScoreEntry
from livequiz.services import round_service
from livequiz.services.leaderboard_service import get_leaderboard, rank_entries

T = datetime(2025, 1, 1, 12, 0, 0)


def _entry(name, score, time_taken, submitted_offset=0):
    return ScoreEntry(
        round_number=1,
        team_name=name,
        score=score,
        time_taken=time_taken,
        submitted_at=T + timedelta(seconds=submitted_offset),
    )


def _names(entries):
    return [e.team_name for e in entries]


def test_higher_score_first():
    ranked = rank_entries([_entry("A", 1, 10), _entry("B", 3, 50), _entry("C", 2, 5)])
    assert _names(ranked) == ["B", "C", "A"]


def test_faster_time_breaks_score_tie():
    ranked = rank_entries([_entry("Alpha", 3, 40), _entry("Gamma", 3, 25)])
    assert _names(ranked) == ["Gamma", "Alpha"]


def test_earlier_submission_breaks_time_tie():
    ranked = rank_entries([_entry("Late", 2, 30, submitted_offset=5), _entry("Early", 2, 30, submitted_offset=1)])
    assert _names(ranked) == ["Early", "Late"]


def test_missing_time_sorts_after_present_time():
    ranked = rank_entries([_entry("NoTime", 2, None), _entry("Slow", 2, 999)])
    assert _names(ranked) == ["Slow", "NoTime"]


def test_disqualified_below_zero_score():
    """-1 must never outrank a real 0, whatever the timing"""
    ranked = rank_entries([_entry("Cheater", -1, 0), _entry("Zero", 0, 120)])
    assert _names(ranked) == ["Zero", "Cheater"]


def test_disqualified_never_above_qualified_any_order():
    entries = [
        _entry("Q1", 0, 100, 3),
        _entry("Q2", 2, 50, 1),
        _entry("D1", -1, 0, 0),
        _entry("D2", -1, 5, 2),
    ]
    for perm in itertools.permutations(entries):
        ranked = rank_entries(list(perm))
        flags = [e.score < 0 for e in ranked]
        assert flags == sorted(flags)
        assert _names(ranked) == ["Q2", "Q1", "D1", "D2"]


# -------------------
# SERVICE
# -------------------
def test_empty_round_returns_empty_list(ctx):
    assert get_leaderboard(1) == {"data": [], "round": 1}


def test_no_round_selected(ctx):
    assert get_leaderboard() == {"data": [], "round": 0}
    assert get_leaderboard(0) == {"data": [], "round": 0}


def test_defaults_to_current_round(ctx, add_entry):
    round_service.start_round(2)
    add_entry("Alpha", 1, 10, T, round_number=2)
    result = get_leaderboard()
    assert result["round"] == 2
    assert [row["team_name"] for row in result["data"]] == ["Alpha"]


def test_unknown_round_rejected(ctx):
    with pytest.raises(InvalidRound):
        get_leaderboard(7)


def test_rows_ranked_and_serialized(ctx, add_entry):
    add_entry("Alpha", 3, 40, T)
    add_entry("Gamma", 3, 25, T + timedelta(seconds=1))
    add_entry("Beta", -1, 0, T)

    rows = get_leaderboard(1)["data"]
    assert [row["team_name"] for row in rows] == ["Gamma", "Alpha", "Beta"]
    assert [row["rank"] for row in rows] == [1, 2, 3]
    assert rows[2]["score"] == -1
    assert rows[0]["time_taken"] == 25
    assert rows[0]["enter_time"] == "2025-01-01T12:00:00Z"
