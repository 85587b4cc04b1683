"""Generic single-row helpers, driven by an allow-list of tables.

Table and column names never reach SQL as raw strings: the table is a
``Table`` member and every column is checked against the model's mapped
columns before the statement is built. Values are always bound parameters.
"""
import enum
import logging
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from twilight.core.errors import AppError, ErrorKind, store_errors
from twilight.models import Hashtag, Like, Tweet, TweetHashtag, User

logger = logging.getLogger(__name__)


class Table(enum.Enum):
    USERS = "user_tbl"
    TWEETS = "tweet_tbl"
    HASHTAGS = "hashtag_tbl"
    TWEET_HASHTAGS = "tweet_hashtag_tbl"
    LIKES = "like_tbl"

    @property
    def model(self):
        return _MODELS[self]

    @property
    def columns(self) -> set[str]:
        return {column.key for column in inspect(self.model).column_attrs}


_MODELS = {
    Table.USERS: User,
    Table.TWEETS: Tweet,
    Table.HASHTAGS: Hashtag,
    Table.TWEET_HASHTAGS: TweetHashtag,
    Table.LIKES: Like,
}


def _column(table: Table, column: str):
    if column not in table.columns:
        raise ValueError(f"Unknown column {column!r} for {table.name}")
    return getattr(table.model, column)


def _check_data(table: Table, data: dict[str, Any]):
    unknown = set(data) - table.columns
    if unknown:
        raise ValueError(f"Unknown columns {sorted(unknown)} for {table.name}")


def find_one(db: Session, table: Table, column: str, value: Any):
    stmt = select(table.model).where(_column(table, column) == value).limit(1)
    with store_errors(db, f"{table.name} findOne query"):
        return db.execute(stmt).scalars().first()


def insert_one(db: Session, table: Table, data: dict[str, Any]):
    _check_data(table, data)
    record = table.model(**data)
    with store_errors(db, f"{table.name} insertion query"):
        db.add(record)
        db.commit()
        db.refresh(record)
    return record


def update_one(db: Session, table: Table, column: str, value: Any, data: dict[str, Any]):
    _check_data(table, data)
    record = find_one(db, table, column, value)
    if record is None:
        return None
    with store_errors(db, f"{table.name} update query"):
        for key, new_value in data.items():
            setattr(record, key, new_value)
        db.commit()
        db.refresh(record)
    return record


def delete_one(db: Session, table: Table, record_id: int) -> int:
    """Delete by primary key through the ORM so relationship cascades run."""
    with store_errors(db, f"{table.name} deleteOne query"):
        record = db.get(table.model, record_id)
        if record is None:
            return 0
        db.delete(record)
        db.commit()
    return 1


def find_or_create(db: Session, table: Table, column: str, value: Any):
    """Return the row where column == value, adding it if missing.

    The insert runs in a savepoint: when a concurrent request committed the
    same value first, the savepoint is rolled back and that row is returned.
    Only flushes, so the caller owns the transaction.
    """
    record = find_one(db, table, column, value)
    if record is not None:
        return record
    with store_errors(db, f"{table.name} findOrCreate query"):
        try:
            with db.begin_nested():
                record = table.model(**{column: value})
                db.add(record)
            return record
        except IntegrityError:
            logger.info("%s %s=%r created concurrently, reusing it", table.name, column, value)
    record = find_one(db, table, column, value)
    if record is None:
        raise AppError(ErrorKind.STORE, "Server Error")
    return record
