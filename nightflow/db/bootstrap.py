# nightflow/db/bootstrap.py
import logging
import os

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Engine

from nightflow.core.config import settings
from nightflow.db.init_db import init_db
from nightflow.db.session import SessionLocal, engine
from nightflow.models.tokens import RefreshToken

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def alembic_config() -> Config:
    # explicit paths so startup works from any cwd
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    return cfg


def ensure_session_store(bind: Engine) -> None:
    """Refresh tokens always live in SQL, whatever STORAGE_BACKEND says."""
    RefreshToken.__table__.create(bind, checkfirst=True)


def run_migrations_and_seed() -> None:
    if settings.RUN_MIGRATIONS:
        logger.info("applying migrations")
        command.upgrade(alembic_config(), "head")
    elif settings.STORAGE_BACKEND == "memory":
        # events stay in memory, but login still needs the token table
        ensure_session_store(engine)

    if settings.SEED_DEMO_DATA and settings.STORAGE_BACKEND != "memory":
        with SessionLocal() as db:
            init_db(db)
