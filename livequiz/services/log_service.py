import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from livequiz.errors import fail_open
from livequiz.models import LogEntry

logger = logging.getLogger("livequiz.events")


def record_event(source, message):
    """Log a lifecycle event and keep it in log_entries (oldest rows trimmed)."""
    logger.info(f"[{source}] {message}")
    try:
        db.session.add(LogEntry(source=source, message=str(message)))
        db.session.flush()
        limit = current_app.config.get("LOG_HISTORY_LIMIT", 1000)
        count = db.session.query(db.func.count(LogEntry.id)).scalar() or 0
        excess = max(0, count - limit)
        if excess > 0:
            old_ids = [row[0] for row in db.session.query(LogEntry.id)
                       .order_by(LogEntry.created_at.asc(), LogEntry.id.asc())
                       .limit(excess)
                       .all()]
            if old_ids:
                LogEntry.query.filter(LogEntry.id.in_(old_ids))\
                    .delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        # audit row is best effort
        db.session.rollback()
        logger.warning(f"Could not store event: {message}", exc_info=True)


@fail_open(list)
def recent_events(limit=50):
    entries = LogEntry.query.order_by(LogEntry.created_at.desc(), LogEntry.id.desc())\
        .limit(limit).all()
    return [e.to_dict() for e in entries]
