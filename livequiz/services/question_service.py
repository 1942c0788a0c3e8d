import json
import logging

from flask import current_app

from livequiz.errors import InvalidRound

logger = logging.getLogger(__name__)


class Question:
    """One multiple-choice question; answer is the exact value that scores."""

    def __init__(self, question, options, answer):
        self.question = question
        self.options = list(options)
        self.answer = answer

    @classmethod
    def from_dict(cls, data):
        if "question" not in data or "options" not in data:
            raise ValueError(f"Question entry needs 'question' and 'options': {data!r}")
        if "answer" in data:
            answer = data["answer"]
        elif "answerIndex" in data:
            answer = int(data["answerIndex"])
        else:
            raise ValueError(f"Question entry needs 'answer' or 'answerIndex': {data!r}")
        return cls(data["question"], data["options"], answer)


class QuestionBank:
    """Read-only per-round question lists."""

    def __init__(self, rounds):
        self._rounds = {}
        for key, entries in rounds.items():
            round_number = int(key)
            if round_number < 1:
                raise ValueError(f"Round numbers start at 1, got {key!r}")
            self._rounds[round_number] = [
                q if isinstance(q, Question) else Question.from_dict(q)
                for q in entries
            ]

    @classmethod
    def from_file(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        rounds = data.get("rounds", data)
        bank = cls(rounds)
        logger.info(f"Loaded question bank from {path}: rounds {bank.rounds}")
        return bank

    @property
    def rounds(self):
        return sorted(self._rounds)

    def validate_round(self, value):
        try:
            round_number = int(value)
        except (TypeError, ValueError):
            raise InvalidRound(f"Invalid round: {value!r}")
        if round_number not in self._rounds:
            raise InvalidRound(f"Round {round_number} does not exist (available: {self.rounds})")
        return round_number

    def questions_for(self, round_number):
        return self._rounds[self.validate_round(round_number)]

    def public_questions(self, round_number):
        # Answer field stays on the server
        return [
            {"question": q.question, "options": list(q.options)}
            for q in self.questions_for(round_number)
        ]


def get_question_bank() -> QuestionBank:
    return current_app.extensions["question_bank"]
