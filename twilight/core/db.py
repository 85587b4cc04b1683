from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from twilight.models.base import Base


class Database:
    """Engine plus session factory, built once per application."""

    def __init__(self, url: str, **engine_kwargs):
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        # models must be imported so their tables are registered on Base.metadata
        from twilight import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def session(self) -> Session:
        return self.SessionLocal()


def get_db(request: Request):
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("DATABASE_URL is not set")
    db = database.session()
    try:
        yield db
    finally:
        db.close()
