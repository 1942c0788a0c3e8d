"""
Older one-endpoint-per-operation URLs, kept for clients that still call them.
All of them delegate to the same services as /api/quiz.
"""
from flask import Blueprint, request, jsonify

from livequiz.errors import InvalidRequest
from livequiz.services import grading_service, leaderboard_service, round_service
from livequiz.services.quiz_service import get_status

legacy_bp = Blueprint("legacy", __name__, url_prefix="/api")


def _body():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object.")
    return data


@legacy_bp.route("/check-quiz-status")
def check_quiz_status():
    return jsonify(get_status())


@legacy_bp.route("/submit", methods=["POST"])
def submit():
    data = _body()
    entry = grading_service.submit_score(
        data.get("teamName"),
        data.get("answers"),
        enter_time=data.get("enterTime"),
        exit_time=data.get("exitTime"),
        has_cheated=data.get("hasCheated") is True,
    )
    return jsonify({"message": "Score submitted successfully", "score": entry.score})


@legacy_bp.route("/disqualify", methods=["POST"])
def disqualify():
    data = _body()
    grading_service.disqualify(data.get("teamName"), enter_time=data.get("enterTime"))
    return jsonify({"message": "User disqualified"})


@legacy_bp.route("/leaderboard")
def leaderboard():
    return jsonify(leaderboard_service.get_leaderboard(request.args.get("round"))["data"])


@legacy_bp.route("/reset-quiz", methods=["POST"])
def reset_quiz():
    return jsonify(round_service.reset_quiz())
