import json
import logging
from datetime import datetime, timezone

from sqlalchemy import JSON, create_engine, inspect
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings

logger = logging.getLogger(__name__)


def dump_json(value) -> str:
    # Non-ASCII stays literal, matching PostgreSQL's JSONB text output.
    return json.dumps(value, ensure_ascii=False)


def _engine_kwargs(database_url: str) -> dict:
    # SQLite connections are shared across FastAPI's worker threads.
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "json_serializer": dump_json}
    return {"pool_pre_ping": True, "json_serializer": dump_json}


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _register_models():
    from app.models import (  # noqa: F401
        Company,
        User,
        Job,
        Application,
        Chat,
        ChatMessage,
    )


def init_db():
    _register_models()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized")
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def ensure_tables_exist() -> list[str]:
    """Create any missing tables without touching existing data. Returns the names created."""
    _register_models()
    try:
        inspector = inspect(engine)
        existing_tables = set(inspector.get_table_names())

        Base.metadata.create_all(bind=engine)
        target_tables = set(Base.metadata.tables.keys())
        created_tables = sorted(target_tables - existing_tables)

        if created_tables:
            logger.info("Created missing DB tables: %s", ", ".join(created_tables))
        else:
            logger.info("All DB tables already exist; no schema changes applied.")
        return created_tables
    except Exception as e:
        logger.exception("Ensure tables failed: %s", e)
        raise


# JSON document column: JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
