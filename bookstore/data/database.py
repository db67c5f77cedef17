# bookstore/data/database.py
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.utils.settings import DATABASE_URL, SQL_ECHO


class Base(DeclarativeBase):
    pass


def _sqlite_transactions(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first DML, which breaks SAVEPOINT and lets
    # two writers deadlock on lock upgrade. Take the write lock when the transaction starts.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        #sqlite connection is shared between request worker threads
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, echo=SQL_ECHO, **kwargs)
        _sqlite_transactions(engine)
        return engine

    kwargs.setdefault("pool_pre_ping", True)
    kwargs.setdefault("pool_recycle", 300)
    return create_engine(url, echo=SQL_ECHO, **kwargs)


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine()
SessionLocal = make_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dialect_insert(session: Session, model):
    """INSERT construct supporting ON CONFLICT for the session's backend."""
    name = session.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert(model)
    if name == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"ON CONFLICT upserts are not supported on {name}")
