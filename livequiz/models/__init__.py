from .quiz_status import QuizStatus, STATUS_ID
from .score_entry import ScoreEntry
from .log_entry import LogEntry

__all__ = [
	"QuizStatus",
	"STATUS_ID",
	"ScoreEntry",
	"LogEntry",
]
