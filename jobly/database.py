import re
from typing import Any, NamedTuple, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, Result
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from jobly.core.config import settings

# Positional placeholders as produced by jobly.core.sql ($1, $2, ...)
_PLACEHOLDER = re.compile(r"\$(\d+)")


def configure_sqlite(engine: Engine) -> None:
    """
    Make pysqlite honour foreign keys and SAVEPOINTs.

    pysqlite starts transactions lazily on its own, which breaks
    Session.begin_nested(); SQLAlchemy emits BEGIN itself instead.
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


# Support both PostgreSQL and SQLite via centralized settings
DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("postgresql"):
    engine = create_engine(DATABASE_URL)
else:
    # SQLite configuration for local development/testing
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )
    configure_sqlite(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    Session Provider: Provides a database session per request.
    Repositories commit their own writes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """
    Registers all domain models and initializes the database schema.
    This should be called during the application startup lifespan.
    """
    # Import all models to ensure they are registered with Base.metadata before create_all
    from jobly.models import company, job, user  # noqa: F401
    Base.metadata.create_all(bind=engine)


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Run a statement written with $1..$n placeholders.

    Placeholders are rewritten to named bind parameters (:p1..:pn) so the
    same SQL runs on every SQLAlchemy dialect.
    """
    statement = text(_PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql))
    params = {f"p{index}": value for index, value in enumerate(values, start=1)}
    return db.execute(statement, params)


# PostgreSQL SQLSTATE codes for integrity violations
_SQLSTATE_KINDS = {
    "23502": "not_null",
    "23503": "foreign_key",
    "23505": "unique",
    "23514": "check",
}
# SQLite only reports "<KIND> constraint failed: <detail>"
_SQLITE_KINDS = {
    "NOT NULL": "not_null",
    "FOREIGN KEY": "foreign_key",
    "UNIQUE": "unique",
    "CHECK": "check",
}


class ConstraintViolation(NamedTuple):
    kind: str
    constraint: str


def constraint_violation(exc: IntegrityError) -> ConstraintViolation:
    """
    Say which constraint an IntegrityError tripped.

    kind is one of not_null, foreign_key, unique, check or unknown.
    constraint is the constraint name on PostgreSQL; on SQLite it is whatever
    the message names (a constraint name, or table.column for UNIQUE).
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None)
    if code:
        name = getattr(getattr(orig, "diag", None), "constraint_name", None)
        return ConstraintViolation(_SQLSTATE_KINDS.get(code, "unknown"), name or "")

    message = str(orig)
    for prefix, kind in _SQLITE_KINDS.items():
        if message.startswith(f"{prefix} constraint failed"):
            return ConstraintViolation(kind, message.partition(":")[2].strip())
    return ConstraintViolation("unknown", message)
