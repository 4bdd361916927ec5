"""Engine, sessions and schema setup for the focuslist store.

`DATABASE_URL` picks the backend. A local SQLite file is used when it is unset.
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./focuslist.db")

# SQLite pragmas applied to every new connection
SQLITE_PRAGMAS = ("foreign_keys=ON", "journal_mode=WAL")


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_flag(name: str) -> bool:
    return os.getenv(name, "False").lower() == "true"


def is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def engine_options(database_url: str) -> dict:
    """create_engine keyword arguments for `database_url`, without connecting."""
    options: dict = {"echo": _env_flag("DEBUG"), "pool_pre_ping": True}

    if is_sqlite_url(database_url):
        # Request handlers run on worker threads
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=_env_int("DB_POOL_SIZE", 5),
            max_overflow=_env_int("DB_MAX_OVERFLOW", 5),
            pool_timeout=_env_int("DB_POOL_TIMEOUT_SEC", 30),
        )
    return options


def build_engine(database_url: str) -> Engine:
    new_engine = create_engine(database_url, **engine_options(database_url))

    if is_sqlite_url(database_url):
        @event.listens_for(new_engine, "connect")
        def apply_sqlite_pragmas(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            for pragma in SQLITE_PRAGMAS:
                cursor.execute(f"PRAGMA {pragma}")
            cursor.close()

    return new_engine


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Session:
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def upgrade_to_head(database_url: str):
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(alembic_cfg, "head")


def init_db():
    """Create the focuslist tables.

    With `RUN_MIGRATIONS=true` on a server database the Alembic revisions are
    applied instead of `create_all()`.
    """
    from focuslist.database import models  # noqa: F401

    if _env_flag("RUN_MIGRATIONS") and not is_sqlite_url(DATABASE_URL):
        upgrade_to_head(DATABASE_URL)
    else:
        Base.metadata.create_all(bind=engine)
