from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from livequiz.errors import InvalidRound, NoActiveRound, fail_open
from livequiz.models import QuizStatus, STATUS_ID

IDLE_STATUS = {
    "quizStarted": False,
    "currentRound": 0,
    "roundDuration": 0,
    "roundStartedAt": None,
}


def ensure_schema():
    """Create missing tables and the status row. Safe to call repeatedly."""
    db.create_all()
    if db.session.get(QuizStatus, STATUS_ID) is None:
        _insert_status_row()


def _insert_status_row():
    try:
        db.session.add(QuizStatus(id=STATUS_ID, started=False, current_round=0))
        db.session.commit()
    except IntegrityError:
        # another worker created it first
        db.session.rollback()


def lock_status(shared=False):
    """
    Status row for a write, locked until commit where the backend supports it.

    Participant writes take a shared lock so they do not queue behind each
    other, only behind round transitions.
    """
    status = QuizStatus.query.filter_by(id=STATUS_ID).with_for_update(read=shared).first()
    if status is None:
        status = QuizStatus(id=STATUS_ID, started=False, current_round=0)
        db.session.add(status)
    return status


def require_round(status, round_number=None, allow_stopped=False):
    """Round a participant write is attributed to, or NoActiveRound."""
    current = int(status.current_round or 0)
    if current < 1:
        raise NoActiveRound("No round is active. Wait for the admin to start one.")
    if round_number not in (None, "", 0, "0"):
        try:
            requested = int(round_number)
        except (TypeError, ValueError):
            raise InvalidRound(f"Invalid round: {round_number!r}")
        if requested != current:
            raise NoActiveRound(f"Round {round_number} is not active (current round is {current}).")
    if not status.started and not allow_stopped and current_app.config.get("REJECT_LATE_SUBMISSIONS"):
        raise NoActiveRound(f"Round {current} has been stopped.")
    return current


@fail_open(lambda: dict(IDLE_STATUS))
def get_status():
    status = db.session.get(QuizStatus, STATUS_ID)
    if status is None:
        return dict(IDLE_STATUS)
    return status.to_dict()


def get_current_round():
    return get_status()["currentRound"]
