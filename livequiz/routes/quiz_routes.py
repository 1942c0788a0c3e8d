from flask import Blueprint, request, jsonify

from livequiz.errors import InvalidRequest, fail_open
from livequiz.services import grading_service, leaderboard_service, round_service
from livequiz.services.log_service import recent_events
from livequiz.services.question_service import get_question_bank
from livequiz.services.quiz_service import get_current_round, get_status

quiz_bp = Blueprint("quiz", __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object.")
    return data


# -------------------
# ADMIN ACTIONS
# -------------------
def _start():
    round_number = request.args.get("round") or _json_body().get("round")
    return round_service.start_round(round_number)


def _stop():
    return round_service.stop_round()


def _reset():
    return round_service.reset_quiz()


# -------------------
# PARTICIPANT ACTIONS
# -------------------
def _submit():
    data = _json_body()
    entry = grading_service.submit_score(
        data.get("teamName"),
        data.get("answers"),
        enter_time=data.get("enterTime"),
        exit_time=data.get("exitTime"),
        round_number=data.get("round"),
        has_cheated=data.get("hasCheated") is True,
    )
    if entry.is_disqualified:
        return {"message": "Team disqualified", "score": entry.score, "round": entry.round_number}
    return {
        "message": f"Score submitted: {entry.score}",
        "score": entry.score,
        "round": entry.round_number,
        "timeTaken": entry.time_taken,
    }


def _disqualify():
    data = _json_body()
    entry = grading_service.disqualify(
        data.get("teamName"),
        enter_time=data.get("enterTime"),
        round_number=data.get("round"),
    )
    return {"message": "Team disqualified", "round": entry.round_number}


# -------------------
# READS (fail open)
# -------------------
def _status():
    return get_status()


@fail_open(list)
def _questions():
    round_number = get_current_round()
    bank = get_question_bank()
    if round_number not in bank.rounds:
        return []
    return bank.public_questions(round_number)


def _leaderboard():
    return leaderboard_service.get_leaderboard(request.args.get("round"))


def _logs():
    try:
        limit = max(1, min(int(request.args.get("limit", 50)), 500))
    except ValueError:
        raise InvalidRequest("limit must be an integer")
    return {"data": recent_events(limit)}


ACTIONS = {
    "start": ("POST", _start),
    "stop": ("POST", _stop),
    "reset": ("POST", _reset),
    "submit": ("POST", _submit),
    "disqualify": ("POST", _disqualify),
    "status": ("GET", _status),
    "questions": ("GET", _questions),
    "leaderboard": ("GET", _leaderboard),
    "logs": ("GET", _logs),
}


@quiz_bp.route("/api/quiz", methods=["GET", "POST"])
def quiz_api():
    action = request.args.get("action", "")
    if action not in ACTIONS:
        raise InvalidRequest(f"Unknown action: {action!r}")

    method, handler = ACTIONS[action]
    if request.method != method:
        return jsonify({"error": "MethodNotAllowed", "message": f"Use {method} for action={action}"}), 405

    return jsonify(handler())
