"""
Database connection management for Doushi.

Provides engine and session helpers for the SQLite lexicon store.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from doushi.db.models import Base
from doushi.settings import DB_PATH, DEBUG

PathLike = Union[str, Path]


def get_engine(db_path: Optional[PathLike] = None) -> Engine:
    """
    Create an engine for a lexicon database.

    Args:
        db_path: SQLite file, or ':memory:'. Defaults to settings.DB_PATH.
    """
    if db_path is None:
        db_path = DB_PATH

    if str(db_path) == ':memory:':
        url = "sqlite://"
    else:
        url = f"sqlite:///{Path(db_path)}"

    engine = create_engine(url, echo=DEBUG)

    @event.listens_for(engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


def init_schema(engine: Engine) -> None:
    """Create all tables."""
    Base.metadata.create_all(engine)


def get_session(db_path: Optional[PathLike] = None) -> Session:
    """
    Open a session on an existing lexicon database.

    Raises:
        FileNotFoundError: If the database file does not exist.
    """
    if db_path is None:
        db_path = DB_PATH
    if str(db_path) != ':memory:' and not Path(db_path).exists():
        raise FileNotFoundError(f"Lexicon database not found at: {db_path}")
    return sessionmaker(bind=get_engine(db_path))()


@contextmanager
def session_scope(db_path: Optional[PathLike] = None, create: bool = False) -> Iterator[Session]:
    """
    Transactional scope around a series of operations.

    Commits on success, rolls back on error, always closes.

    Args:
        db_path: Database path (defaults to settings.DB_PATH).
        create: Create the file and schema if missing.
    """
    if create:
        if db_path is None:
            db_path = DB_PATH
        if str(db_path) != ':memory:':
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = get_engine(db_path)
        init_schema(engine)
        session = sessionmaker(bind=engine)()
    else:
        session = get_session(db_path)

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
