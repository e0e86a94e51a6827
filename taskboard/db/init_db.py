import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from taskboard.db.base import Base

logger = logging.getLogger(__name__)

# Tables whose updated_at is stamped by the database on every UPDATE.
TIMESTAMPED_TABLES = ("tasks", "checklists", "projects", "daily_tasks")

def _timestamp_trigger(table: str) -> str:
    return (
        f"CREATE TRIGGER IF NOT EXISTS update_{table}_timestamp "
        f"AFTER UPDATE ON {table} "
        f"BEGIN "
        f"UPDATE {table} SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id; "
        f"END"
    )

def init_db(engine: Engine) -> None:
    """Create tables, indexes and triggers. Re-running against an initialised store is a no-op."""
    Base.metadata.create_all(bind=engine)

    with engine.begin() as conn:
        for table in TIMESTAMPED_TABLES:
            conn.execute(text(_timestamp_trigger(table)))

    logger.debug("Schema ready (%d tables)", len(Base.metadata.tables))
