import logging
from collections import namedtuple
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Executable

from taskboard.core.errors import ConflictError, ConstraintError, InternalError
from taskboard.db.init_db import init_db

logger = logging.getLogger(__name__)

ExecResult = namedtuple("ExecResult", ["last_insert_id", "rows_affected"])

Statement = Union[str, Executable]
Row = Dict[str, Any]


def _set_sqlite_pragma(dbapi_connection, connection_record):
    # Foreign keys are off by default in SQLite and the setting is per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.execute("PRAGMA synchronous = NORMAL")
    cursor.close()


def _translate(exc: IntegrityError) -> Exception:
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    if "UNIQUE constraint failed" in detail:
        return ConflictError("Resource already exists", errors=[{"field": None, "message": detail}])
    return ConstraintError("Invalid data", errors=[{"field": None, "message": detail}])


def _prepare(statement: Statement) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class QueryRunner:
    """Runs statements on one open connection. Handed out by Database.transaction()."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def _run(self, statement: Statement, params: Optional[Mapping[str, Any]]):
        try:
            if params:
                return self.conn.execute(_prepare(statement), dict(params))
            return self.conn.execute(_prepare(statement))
        except IntegrityError as exc:
            raise _translate(exc) from exc

    def execute(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> ExecResult:
        result = self._run(statement, params)
        return ExecResult(last_insert_id=result.lastrowid, rows_affected=result.rowcount)

    def fetch_one(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        row = self._run(statement, params).mappings().first()
        return dict(row) if row is not None else None

    def fetch_many(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        return [dict(row) for row in self._run(statement, params).mappings().all()]


class Database:
    """Sole owner of the SQLite engine. Everything else reads and writes through it."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.engine: Optional[Engine] = None

    @property
    def url(self) -> str:
        return f"sqlite:///{self.db_path}"

    def init(self) -> None:
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            self.engine = create_engine(
                self.url,
                connect_args={"check_same_thread": False},
            )
            event.listen(self.engine, "connect", _set_sqlite_pragma)

            init_db(self.engine)
            logger.info("Database initialized at %s", self.db_path)
        except Exception:
            logger.exception("Database initialization error")
            # Never leave a half-open engine behind.
            self.close()
            raise

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            logger.info("Database connection closed")

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise InternalError("Database not initialized")
        return self.engine

    @contextmanager
    def transaction(self) -> Iterator[QueryRunner]:
        """Commit when the block returns, roll back and re-raise on any failure inside it."""
        with self._require_engine().begin() as conn:
            yield QueryRunner(conn)

    def execute(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> ExecResult:
        with self.transaction() as tx:
            return tx.execute(statement, params)

    def fetch_one(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        with self._require_engine().connect() as conn:
            return QueryRunner(conn).fetch_one(statement, params)

    def fetch_many(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        with self._require_engine().connect() as conn:
            return QueryRunner(conn).fetch_many(statement, params)
