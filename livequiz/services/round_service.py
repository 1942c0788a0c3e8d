"""
Round lifecycle: Idle -> RoundActive(n) -> RoundStoppedButFinishing(n) -> ...

Every transition is a single transaction on the status row, so a failure
never leaves an active round pointer next to a half-cleared ledger.
"""
import logging

from flask import current_app

from extensions import db
from livequiz.errors import NoActiveRound, fail_closed
from livequiz.services.log_service import record_event
from livequiz.services.question_service import get_question_bank
from livequiz.services.quiz_service import ensure_schema, lock_status
from livequiz.services.score_service import clear_all, clear_round
from livequiz.services.utils import utcnow

logger = logging.getLogger(__name__)


def _activate(status, round_number):
    status.started = True
    status.current_round = round_number
    status.round_started_at = utcnow()
    status.round_duration = current_app.config["ROUND_DURATION_SECONDS"]


@fail_closed
def start_round(round_number):
    """Clear round_number's scores and make it the running round."""
    round_number = get_question_bank().validate_round(round_number)

    ensure_schema()
    status = lock_status()
    cleared = clear_round(round_number)
    _activate(status, round_number)
    db.session.commit()

    record_event("admin", f"Round {round_number} started ({cleared} previous results cleared)")
    return {"message": f"Round {round_number} started", "currentRound": round_number}


@fail_closed
def stop_round():
    """Stop accepting new starts; the round stays selected for late submissions."""
    ensure_schema()
    status = lock_status()
    if not status.current_round:
        raise NoActiveRound("No round is active.")

    round_number = status.current_round
    was_running = status.started
    status.started = False
    db.session.commit()

    if was_running:
        record_event("admin", f"Round {round_number} stopped")
    return {"message": f"Round {round_number} stopped", "currentRound": round_number}


@fail_closed
def reset_quiz():
    """Clear every round's results and return to Idle."""
    ensure_schema()
    status = lock_status()
    cleared = clear_all()
    status.started = False
    status.current_round = 0
    status.round_started_at = None
    status.round_duration = 0
    db.session.commit()

    record_event("admin", f"Quiz reset ({cleared} results cleared)")
    return {"message": "Quiz and leaderboard have been reset.", "currentRound": 0}
