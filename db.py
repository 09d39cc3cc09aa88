# db.py
# Role: Database bootstrap for the shared-expense ledger.
#       Defines the engine factory, SQLAlchemy session factory, and declarative Base.
#       Also ensures the on-disk database directory exists before the app starts.

"""
Database setup for the shared-expense ledger.

- Uses DATABASE_URL from the environment (.env supported)
- Falls back to a SQLite database at: <project_root>/database/ledger.db
- Turns on foreign key enforcement for SQLite connections
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

load_dotenv()

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Folder for the default SQLite DB
DB_DIR = os.path.join(BASE_DIR, "database")

# Full path to the default SQLite database file
DB_PATH = os.path.join(DB_DIR, "ledger.db")

# SQLAlchemy connection URL (env wins over the on-disk default)
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH}")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _disable_pysqlite_autobegin(dbapi_connection, connection_record):
    # BEGIN is emitted by _sqlite_begin instead of the driver
    dbapi_connection.isolation_level = None


def _sqlite_begin(conn):
    # IMMEDIATE takes the write lock at BEGIN, before the first read
    mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
    conn.exec_driver_sql(f"BEGIN {mode}")


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for the given URL.

    For SQLite we need check_same_thread=False for FastAPI (threaded request
    handling) and the foreign key pragma on every new connection. BEGIN is
    issued by SQLAlchemy so a unit of work can ask for BEGIN IMMEDIATE with
    the "sqlite_begin" execution option.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        event.listen(engine, "connect", _disable_pysqlite_autobegin)
        event.listen(engine, "begin", _sqlite_begin)
        return engine
    return create_engine(url, **kwargs)


if DATABASE_URL == f"sqlite:///{DB_PATH}":
    os.makedirs(DB_DIR, exist_ok=True)  # ensure folder exists

engine = build_engine(DATABASE_URL)

# Standard session factory used via dependency injection (see app/deps.py:get_db)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base class for ORM models
Base = declarative_base()
