from livequiz.errors import fail_open
from livequiz.services.question_service import get_question_bank
from livequiz.services.quiz_service import get_current_round
from livequiz.services.score_service import entries_for_round


def ranking_key(entry):
    """
    Sort key for standings.

    Disqualified entries go last whatever their numbers; then more correct
    answers first, faster time first (missing time last), earlier write first.
    """
    return (
        entry.score < 0,
        -entry.score,
        entry.time_taken is None,
        entry.time_taken if entry.time_taken is not None else 0,
        entry.submitted_at,
    )


def rank_entries(entries):
    return sorted(entries, key=ranking_key)


@fail_open(list)
def _ranked_rows(round_number):
    rows = []
    for idx, entry in enumerate(rank_entries(entries_for_round(round_number))):
        row = entry.to_dict()
        row["rank"] = idx + 1
        rows.append(row)
    return rows


def resolve_round(round_number=None):
    """Requested round, or the current one when omitted or 0. 0 means none."""
    if round_number in (None, "", 0, "0"):
        return get_current_round()
    return get_question_bank().validate_round(round_number)


def get_leaderboard(round_number=None):
    round_num = resolve_round(round_number)
    if not round_num:
        return {"data": [], "round": 0}
    return {"data": _ranked_rows(round_num), "round": round_num}
