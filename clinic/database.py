from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session
import logging

from .config import settings

logger = logging.getLogger(__name__)


def _install_sqlite_locking(engine: Engine) -> None:
    """Start every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so two bookings could both
    read a free schedule before either writes. Taking the write lock at BEGIN
    turns the conflict check and the insert into one serialized unit.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(db_url: str, echo: bool = False, **kwargs) -> Engine:
    # Choose engine options based on database scheme
    engine_kwargs = dict(kwargs)
    if db_url.startswith("sqlite"):
        # SQLite specific connect args
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        # Better resiliency for managed Postgres
        engine_kwargs.setdefault("pool_pre_ping", True)
        engine_kwargs.setdefault("pool_recycle", 300)
        engine_kwargs.setdefault("pool_size", 5)
        engine_kwargs.setdefault("max_overflow", 10)

    engine = create_engine(db_url, echo=echo, **engine_kwargs)
    if db_url.startswith("sqlite"):
        _install_sqlite_locking(engine)
    return engine


engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def create_db_and_tables(bind: Engine = None):
    # Import so every table is registered on SQLModel.metadata
    from .db import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables ensured")


def get_session():
    with Session(engine) as session:
        yield session
