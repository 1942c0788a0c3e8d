import logging

from sqlalchemy.exc import IntegrityError

from extensions import db
from livequiz.models import ScoreEntry
from livequiz.services.utils import utcnow

logger = logging.getLogger(__name__)

_UPSERT_FIELDS = ("score", "enter_time", "exit_time", "time_taken", "submitted_at")


def _dialect_insert():
    name = db.engine.dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def upsert_entry(round_number, team_name, score, enter_time, exit_time, time_taken,
                 keep_disqualified=False):
    """
    Write one team's result for a round, overwriting any earlier row.

    Uses INSERT ... ON CONFLICT so concurrent writes from the same team
    converge on one row. With keep_disqualified the conflict update only
    applies to rows that are not disqualified, checked inside the same
    statement. Returns the number of rows written (0 when a disqualified
    row was kept). Does not commit.
    """
    values = {
        "round_number": round_number,
        "team_name": team_name,
        "score": score,
        "enter_time": enter_time,
        "exit_time": exit_time,
        "time_taken": time_taken,
        "submitted_at": utcnow(),
    }

    insert = _dialect_insert()
    if insert is not None:
        stmt = insert(ScoreEntry).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["round_number", "team_name"],
            set_={field: stmt.excluded[field] for field in _UPSERT_FIELDS},
            where=ScoreEntry.__table__.c.score >= 0 if keep_disqualified else None,
        )
        return db.session.execute(stmt).rowcount

    try:
        with db.session.begin_nested():
            return _merge_entry(values, keep_disqualified)
    except IntegrityError:
        logger.info(f"Concurrent write for {team_name!r} in round {round_number}, retrying")
        return _merge_entry(values, keep_disqualified)


def _merge_entry(values, keep_disqualified=False):
    query = ScoreEntry.query.filter_by(
        round_number=values["round_number"], team_name=values["team_name"]
    )
    entry = query.with_for_update().first()
    if entry is None:
        entry = ScoreEntry(round_number=values["round_number"], team_name=values["team_name"])
        db.session.add(entry)
    elif keep_disqualified and entry.is_disqualified:
        return 0
    for field in _UPSERT_FIELDS:
        setattr(entry, field, values[field])
    db.session.flush()
    return 1


def get_entry(round_number, team_name):
    return ScoreEntry.query.filter_by(round_number=round_number, team_name=team_name).first()


def entries_for_round(round_number):
    return ScoreEntry.query.filter_by(round_number=round_number).all()


def clear_round(round_number):
    """Delete every result of one round. Does not commit."""
    return ScoreEntry.query.filter_by(round_number=round_number)\
        .delete(synchronize_session=False)


def clear_all():
    return ScoreEntry.query.delete(synchronize_session=False)
