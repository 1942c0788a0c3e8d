"""
Shared fixtures: an app on in-memory SQLite with a small question bank
"""
from datetime import datetime

import pytest

from app import create_app
from config import TestConfig
from extensions import db
from livequiz.models import ScoreEntry
from livequiz.services.question_service import QuestionBank

ROUNDS = {
    "1": [
        {"question": "2 + 2 = ?", "options": ["3", "4", "5"], "answer": "4"},
        {"question": "Capital of France?", "options": ["Lyon", "Paris", "Nice"], "answer": "Paris"},
        {"question": "Largest planet?", "options": ["Mars", "Jupiter", "Venus"], "answer": "Jupiter"},
    ],
    "2": [
        {"question": "First letter?", "options": ["A", "B"], "answerIndex": 0},
        {"question": "Last letter?", "options": ["Y", "Z"], "answerIndex": 1},
    ],
}

@pytest.fixture
def make_app():
    created = []

    def _make(**overrides):
        config_class = type("OverrideConfig", (TestConfig,), overrides)
        app = create_app(config_class, question_bank=QuestionBank(ROUNDS))
        created.append(app)
        return app

    yield _make

    for app in created:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """App context for calling services directly."""
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def add_entry(ctx):
    """Insert a ledger row with explicit timing for ranking tests."""
    def _add(team_name, score, time_taken, submitted_at, round_number=1):
        entry = ScoreEntry(
            round_number=round_number,
            team_name=team_name,
            score=score,
            enter_time=datetime(2025, 1, 1, 12, 0, 0),
            exit_time=datetime(2025, 1, 1, 12, 0, 0),
            time_taken=time_taken,
            submitted_at=submitted_at,
        )
        db.session.add(entry)
        db.session.commit()
        return entry
    return _add
