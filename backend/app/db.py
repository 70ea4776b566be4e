# backend/app/db.py
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from backend.app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str):
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Make sure folder exists for a file-backed database
        if url.database and url.database != ":memory:":
            folder = os.path.dirname(url.database)
            if folder:
                os.makedirs(folder, exist_ok=True)
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


# Create engine and session
engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables (safe to call repeatedly)."""
    # Import models *AFTER* Base is defined
    from backend.app.models.transaction_model import Transaction  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database ready at %s", target.url.render_as_string(hide_password=True))
