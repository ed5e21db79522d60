import logging

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, declarative_base

from skillconnect.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    # SQLite is only used for local runs; the threadpool shares connections across threads
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 1800}


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _load_models() -> None:
    import skillconnect.models  # noqa: F401


def init_db():
    _load_models()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database ready: %d tables registered", len(Base.metadata.tables))
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def ensure_tables_exist() -> list[str]:
    """
    Create the profiles/jobs/applications/admin_activity_log tables that are
    missing and return their names. Existing tables and rows are left alone.
    """
    _load_models()
    try:
        existing = set(inspect(engine).get_table_names())
        missing = sorted(name for name in Base.metadata.tables if name not in existing)
        if not missing:
            logger.info("Schema check: all %d tables present", len(Base.metadata.tables))
            return []
        Base.metadata.create_all(bind=engine)
        logger.info("Schema check: created %s", ", ".join(missing))
        return missing
    except Exception as e:
        logger.exception("Schema check failed: %s", e)
        raise
