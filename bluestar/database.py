"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base: Any = declarative_base()


class Database:
    """Process-wide datastore client: one engine and its session factory.

    Constructed once at application startup and disposed at shutdown.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        if url.startswith("sqlite"):
            engine_args: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        else:
            engine_args = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}
        self.engine = create_engine(url, echo=echo, **engine_args)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        """Yield a session that is closed when the caller is done with it."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        """Create all tables known to the models."""
        # Import all models here so they are registered with Base.metadata
        from bluestar import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session from the application's client."""
    database: Database = request.app.state.database
    yield from database.session()
