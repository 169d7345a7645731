"""
SQLAlchemy engines, sessions, and bases for the SQLite store files.

Two schemas: the per-language store (one file per culture code) and the combined store
produced by merging. Every run recreates the target file from scratch.
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base

from .errors import PersistenceError

logger = logging.getLogger(__name__)

LanguageStoreBase = declarative_base()
MergedStoreBase = declarative_base()

PathLike = Union[str, Path]


def _engine_for(path: Path) -> Engine:
    return create_engine(f"sqlite:///{path}", echo=False, future=True)


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
    """Context manager for a single DB session. Commits on success, rolls back on error."""
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def remove_store(path: PathLike) -> None:
    """Delete a store file if it exists."""
    path = Path(path)
    if path.exists():
        logger.debug(f"Removing old store {path}")
        path.unlink()


def create_store(path: PathLike, metadata: MetaData) -> Engine:
    """
    Delete any old store at path and create a fresh one with the tables in metadata.
    Caller owns the returned engine and must dispose it.
    """
    path = Path(path)
    remove_store(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    engine = _engine_for(path)
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise PersistenceError(f"Unable to create store {path}: {e}") from e
    logger.info(f"Store created: {path}")
    return engine


def open_store(path: PathLike) -> Engine:
    """Open an existing store. SQLite would silently create a missing file, so check first."""
    path = Path(path)
    if not path.is_file():
        raise PersistenceError(f"Store not found: {path}")
    return _engine_for(path)
