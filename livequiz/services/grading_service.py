import logging
import math
from datetime import timedelta

from flask import current_app

from extensions import db
from livequiz.errors import InvalidRequest, TeamDisqualified, fail_closed
from livequiz.models import ScoreEntry
from livequiz.services.log_service import record_event
from livequiz.services.question_service import get_question_bank
from livequiz.services.quiz_service import ensure_schema, lock_status, require_round
from livequiz.services.score_service import get_entry, upsert_entry
from livequiz.services.utils import parse_client_timestamp, utcnow

logger = logging.getLogger(__name__)

# Marker for a question the team left empty
UNANSWERED = None


def normalize_answers(raw, count):
    """
    Align submitted answers with the round's questions.

    Accepts a list (null for skipped questions) or a mapping of question index
    to value, the shape browser forms produce ({"0": 1, "2": 3}).
    Returns a list of length count with UNANSWERED in the holes.
    """
    answers = [UNANSWERED] * count
    if raw is None:
        return answers

    if isinstance(raw, dict):
        items = raw.items()
    elif isinstance(raw, (list, tuple)):
        items = enumerate(raw)
    else:
        raise InvalidRequest("answers must be a list or an object keyed by question index")

    for key, value in items:
        try:
            index = int(key)
        except (TypeError, ValueError):
            raise InvalidRequest(f"Invalid answer index: {key!r}")
        if 0 <= index < count:
            answers[index] = value
    return answers


def is_correct(answer, correct_answer):
    if answer is UNANSWERED:
        return False
    # bools compare equal to 0 and 1
    if isinstance(answer, bool) != isinstance(correct_answer, bool):
        return False
    return answer == correct_answer


def compute_score(answers, questions):
    """Number of questions whose answer equals the correct answer exactly."""
    normalized = normalize_answers(answers, len(questions))
    return sum(
        1 for answer, question in zip(normalized, questions)
        if is_correct(answer, question.answer)
    )


def compute_time_taken(enter_time, exit_time):
    """Whole seconds between entering and leaving the round, never negative."""
    if enter_time is None or exit_time is None:
        return None
    return max(0, math.floor((exit_time - enter_time).total_seconds()))


def resolve_timing(enter_time, exit_time, round_duration):
    """
    Fill missing timestamps so a stored result always has timing.

    exit_time defaults to now, enter_time to exit_time minus the round length.
    """
    exit_at = parse_client_timestamp(exit_time) or utcnow()
    enter_at = parse_client_timestamp(enter_time) or exit_at - timedelta(seconds=round_duration)
    return enter_at, exit_at, compute_time_taken(enter_at, exit_at)


def _clean_team_name(team_name):
    name = (team_name or "").strip() if isinstance(team_name, str) else ""
    if not name:
        raise InvalidRequest("Team name required.")
    if len(name) > 255:
        raise InvalidRequest("Team name is too long.")
    return name


@fail_closed
def submit_score(team_name, answers, enter_time=None, exit_time=None,
                 round_number=None, has_cheated=False):
    """Score a team's answers for the active round and store the result."""
    team_name = _clean_team_name(team_name)
    if has_cheated:
        return disqualify(team_name, enter_time=enter_time, round_number=round_number)

    ensure_schema()
    status = lock_status(shared=True)
    round_num = require_round(status, round_number)

    questions = get_question_bank().questions_for(round_num)
    score = compute_score(answers, questions)
    enter_at, exit_at, time_taken = resolve_timing(
        enter_time, exit_time, current_app.config["ROUND_DURATION_SECONDS"]
    )

    written = upsert_entry(
        round_num, team_name, score, enter_at, exit_at, time_taken,
        keep_disqualified=current_app.config.get("DISQUALIFICATION_IS_TERMINAL", False),
    )
    if not written:
        raise TeamDisqualified(f"Team {team_name} is disqualified from round {round_num}.")
    db.session.commit()

    record_event("player", f"{team_name} scored {score}/{len(questions)} in round {round_num} ({time_taken}s)")
    return get_entry(round_num, team_name)


@fail_closed
def disqualify(team_name, enter_time=None, round_number=None):
    """Mark a team as disqualified in the active round (score -1)."""
    team_name = _clean_team_name(team_name)

    ensure_schema()
    status = lock_status(shared=True)
    round_num = require_round(status, round_number, allow_stopped=True)

    exit_at = utcnow()
    enter_at = parse_client_timestamp(enter_time)
    time_taken = compute_time_taken(enter_at, exit_at) if enter_at is not None else 0

    upsert_entry(round_num, team_name, ScoreEntry.DISQUALIFIED_SCORE, enter_at, exit_at, time_taken)
    db.session.commit()

    record_event("player", f"{team_name} disqualified in round {round_num}")
    return get_entry(round_num, team_name)
