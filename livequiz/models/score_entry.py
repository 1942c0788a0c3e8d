from extensions import db
from livequiz.services.utils import to_iso


class ScoreEntry(db.Model):
    """
    One team's result for one round.

    score is the number of correct answers, or DISQUALIFIED_SCORE.
    Rows are overwritten on resubmission (unique per round and team).
    """
    __tablename__ = "scores"

    DISQUALIFIED_SCORE = -1

    id = db.Column(db.Integer, primary_key=True)
    round_number = db.Column(db.Integer, nullable=False)
    team_name = db.Column(db.String(255), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    enter_time = db.Column(db.DateTime, nullable=True)
    exit_time = db.Column(db.DateTime, nullable=True)
    time_taken = db.Column(db.Integer, nullable=True)
    submitted_at = db.Column(db.DateTime, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("round_number", "team_name", name="uq_scores_round_team"),
        db.Index("ix_scores_round", "round_number"),
    )

    @property
    def is_disqualified(self):
        return self.score < 0

    def to_dict(self):
        return {
            "team_name": self.team_name,
            "score": self.score,
            "enter_time": to_iso(self.enter_time),
            "exit_time": to_iso(self.exit_time),
            "time_taken": self.time_taken,
        }
