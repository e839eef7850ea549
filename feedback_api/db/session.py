# feedback_api/db/session.py
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from feedback_api.core.config import mask_url

logger = logging.getLogger(__name__)


def build_engine(db_url: str) -> Engine:
    logger.info("Using database %s", mask_url(db_url))
    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # in-memory databases live as long as their single connection
        if db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, **kwargs)

    return create_engine(
        db_url,
        pool_size=5,              # 5 concurrent connections
        max_overflow=10,          # up to 15 at peak
        pool_timeout=30,          # 30s to acquire a connection
        pool_recycle=1800,        # recycle every 30 min
        pool_pre_ping=True,       # check the connection is alive
        echo=False,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def check_db_connection(engine: Engine) -> bool:
    """Checks that the store answers a trivial query."""
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1")).fetchone()
            return bool(row and row[0] == 1)
    except SQLAlchemyError as exc:
        logger.error("Database connection failed: %s", exc)
        return False
