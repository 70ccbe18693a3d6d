import logging
from datetime import datetime, timezone
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from aptiquest.core.config import settings
from aptiquest.core.exceptions import ServerError

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared across FastAPI's threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def db_errors(db: Session, action: str):
    """Roll back and re-raise persistence failures as ServerError"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Database error while {action}: {e}")
        raise ServerError(f"Server error while {action}") from e


def utcnow() -> datetime:
    """Timestamp default with microsecond resolution (SQLite CURRENT_TIMESTAMP has seconds)"""
    return datetime.now(timezone.utc)
