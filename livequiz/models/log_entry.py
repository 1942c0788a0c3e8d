from extensions import db
from livequiz.services.utils import to_iso, utcnow


class LogEntry(db.Model):
    __tablename__ = "log_entries"

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    source = db.Column(db.String(50), nullable=False)
    message = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            "created_at": to_iso(self.created_at),
            "source": self.source,
            "message": self.message,
        }
