# backend/spotbnb/database.py
from datetime import datetime
import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from .core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str, **overrides: Any) -> Engine:
    """Create an engine tuned for the dialect behind ``url``."""
    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    else:
        kwargs = {
            "poolclass": QueuePool,
            "pool_size": 10,  # Number of persistent connections
            "max_overflow": 10,  # Maximum overflow connections
            "pool_timeout": 30,  # Timeout for getting connection
            "pool_recycle": 3600,  # Recycle connections after 1 hour
            "pool_pre_ping": True,  # Test connections before using
            "connect_args": {"connect_timeout": 10, "application_name": "spotbnb_backend"},
        }
    kwargs.update(overrides)
    new_engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):
        # ON DELETE CASCADE is only honoured with foreign_keys enabled
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)

    event.listen(new_engine, "connect", _receive_connect)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


engine: Engine = build_engine(settings.get_database_url())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Create all tables registered on ``Base.metadata``."""
    from . import models  # noqa: F401  (register models on the metadata)

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
