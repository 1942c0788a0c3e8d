"""
Error taxonomy for the quiz core and the read/write failure policy.

Read paths (status, questions, leaderboard, event log) fail open: storage
errors are logged and replaced by a neutral default so viewer pages always
render. Write paths (start, stop, reset, submit, disqualify) fail closed: the
transaction is rolled back and StorageUnavailable is raised.
"""
import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from extensions import db

logger = logging.getLogger(__name__)


class QuizError(Exception):
    status_code = 400
    code = "QuizError"

    def __init__(self, message=None):
        super().__init__(message or self.__doc__)
        self.message = message or self.__doc__

    def to_dict(self):
        return {"error": self.code, "message": self.message}


class InvalidRequest(QuizError):
    """Malformed request."""
    code = "InvalidRequest"


class InvalidRound(QuizError):
    """Round is not part of the question bank."""
    code = "InvalidRound"


class NoActiveRound(QuizError):
    """No round is currently active."""
    code = "NoActiveRound"


class TeamDisqualified(QuizError):
    """Team has been disqualified from this round."""
    status_code = 409
    code = "TeamDisqualified"


class StorageUnavailable(QuizError):
    """Storage is unavailable, try again."""
    status_code = 503
    code = "StorageUnavailable"


def fail_open(default):
    """Read-path policy: return default() instead of raising on storage errors."""
    def decorator(fn):
        @wraps(fn)
        def wrapped(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                logger.error(f"Storage error in {fn.__name__}, serving default", exc_info=True)
                return default()
        return wrapped
    return decorator


def fail_closed(fn):
    """Write-path policy: roll back and raise StorageUnavailable on storage errors."""
    @wraps(fn)
    def wrapped(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Storage error in {fn.__name__}: {e}", exc_info=True)
            raise StorageUnavailable() from e
        except QuizError:
            db.session.rollback()
            raise
    return wrapped
