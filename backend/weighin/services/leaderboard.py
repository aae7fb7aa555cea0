import math
from typing import List, NamedTuple, Optional

from flask import current_app
from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from weighin.errors import StorageError, ValidationError
from weighin.models import ScoreRecord


CREATED = 'created'
UPDATED = 'updated'
UNCHANGED = 'unchanged'

MAX_NAME_LENGTH = 100

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class SubmitResult(NamedTuple):
    name: str
    score: float
    outcome: str

    @property
    def created(self) -> bool:
        return self.outcome == CREATED


def validate_submission(name, score) -> float:
    """Reject anything that is not a non-blank name and a finite number.

    Returns the score as the float that will be stored.
    """
    error = ValidationError('Name and score are required, and score must be a number.')
    valid_name = isinstance(name, str) and name.strip() and len(name) <= MAX_NAME_LENGTH
    if not valid_name or not isinstance(score, (int, float)) or isinstance(score, bool):
        raise error
    try:
        score = float(score)
    except OverflowError:
        raise error
    if not math.isfinite(score):
        raise error
    return score


class LeaderboardService:
    """Reads and writes best scores through an injected Flask-SQLAlchemy handle.

    Submissions follow a max-upsert policy: the first submission for a name
    creates the record, later ones only ever raise it. Both writes are single
    statements, so concurrent submissions for the same name settle on the
    highest score without creating a second row.
    """

    def __init__(self, db, limit: int = 10):
        self._db = db
        self._limit = limit

    def get_top(self, n: Optional[int] = None) -> List[ScoreRecord]:
        limit = self._limit if n is None else n
        query = (
            select(ScoreRecord)
            .order_by(ScoreRecord.score.desc(), ScoreRecord.name.asc())
            .limit(limit)
        )
        try:
            return list(self._db.session.scalars(query))
        except SQLAlchemyError:
            self._db.session.rollback()
            current_app.logger.exception('[leaderboard-read] query failed')
            raise StorageError('Failed to retrieve leaderboard')

    def submit_score(self, name, score) -> SubmitResult:
        score = validate_submission(name, score)
        try:
            result = self._upsert_max(name, score)
            self._db.session.commit()
        except SQLAlchemyError:
            self._db.session.rollback()
            current_app.logger.exception(f'[leaderboard-submit] name={name!r} failed')
            raise StorageError('Failed to process score submission due to database error.')
        current_app.logger.info(
            f'[leaderboard-submit] name={name!r} submitted={score} stored={result.score} outcome={result.outcome}'
        )
        return result

    def _upsert_max(self, name: str, score) -> SubmitResult:
        session = self._db.session
        table = ScoreRecord.__table__

        inserted = session.execute(self._insert_if_absent(name, score))
        if inserted.rowcount == 1:
            return SubmitResult(name, score, CREATED)

        raised = session.execute(
            update(table)
            .where(table.c.name == name, table.c.score < score)
            .values(score=score)
        )
        if raised.rowcount == 1:
            return SubmitResult(name, score, UPDATED)

        stored = session.execute(
            select(table.c.score).where(table.c.name == name)
        ).scalar_one()
        return SubmitResult(name, stored, UNCHANGED)

    def _insert_if_absent(self, name: str, score):
        dialect = self._db.engine.dialect.name
        insert = _CONFLICT_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f'Unsupported database dialect: {dialect}')
        return (
            insert(ScoreRecord.__table__)
            .values(name=name, score=score)
            .on_conflict_do_nothing(index_elements=['name'])
        )
