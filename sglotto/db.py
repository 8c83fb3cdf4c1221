from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from .config import load_settings
from .models import Base

logger = logging.getLogger("sglotto.db")

settings = load_settings()

engine = create_engine(settings.database_url, future=True, echo=False, pool_pre_ping=True)
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True))

T = TypeVar("T")


def init_db() -> None:
    """Create the results, schedule and cascade tables if they do not exist yet."""
    logger.info("Initialising database at %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(engine)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Unit of work for writes: commit on success, roll back and re-raise otherwise."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug("Rolling back session after error", exc_info=True)
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def read_session() -> Iterator[Session]:
    """Session for lookups; nothing is committed."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def detach(session: Session, instance: T) -> T:
    """Flush pending changes and hand ``instance`` back usable outside the session."""
    session.flush()
    session.refresh(instance)
    session.expunge(instance)
    return instance
