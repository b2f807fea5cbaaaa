from typing import Generator
from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from quizapp.database.session import SQLALCHEMY_DATABASE_URL, get_engine, get_local_session
from quizapp.log import get_logger

log = get_logger(__name__)


ENGINE = get_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(
    bind=ENGINE,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:  # pragma: no cover
    """Request-scoped session for FastAPI's Depends; closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_ctx_db(database_url: str) -> Generator[Session, None, None]:
    """`with`-block session for the scripts under script/.

    Anything raised inside the block rolls the session back and propagates.
    """
    db = get_local_session(database_url)()
    try:
        yield db
    except Exception as e:
        log.error("database work against %s failed, rolling back: %s", database_url.split("@")[-1], e)
        db.rollback()
        raise
    finally:
        db.close()
