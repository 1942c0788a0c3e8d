from extensions import db
from livequiz.services.utils import to_iso

STATUS_ID = 1


class QuizStatus(db.Model):
    """Single-row record of which round is selected and whether it is running."""
    __tablename__ = "quiz_status"

    id = db.Column(db.Integer, primary_key=True)
    started = db.Column(db.Boolean, nullable=False, default=False)
    current_round = db.Column(db.Integer, nullable=False, default=0)
    round_started_at = db.Column(db.DateTime, nullable=True)
    round_duration = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.CheckConstraint("NOT started OR current_round >= 1", name="ck_quiz_status_started_round"),
    )

    def to_dict(self):
        return {
            "quizStarted": bool(self.started),
            "currentRound": int(self.current_round or 0),
            "roundDuration": int(self.round_duration or 0),
            "roundStartedAt": to_iso(self.round_started_at),
        }
