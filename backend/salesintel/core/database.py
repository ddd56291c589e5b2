from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from salesintel.core.config import settings

Base = declarative_base()


def utcnow() -> datetime:
    # stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def configure_sqlite(engine: Engine) -> Engine:
    """
    pysqlite defers BEGIN and ships with foreign keys off, which breaks
    SAVEPOINT and ON DELETE CASCADE. Take over transaction control so SQLite
    behaves like Postgres for both.

    Transactions start IMMEDIATE so concurrent writers queue on the busy
    timeout rather than failing with "database is locked".
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_engine(database_url: str) -> Engine:
    # SQLite needs check_same_thread, Postgres must NOT have it
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        return configure_sqlite(engine)
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def import_models() -> None:
    # register every table on Base.metadata
    from salesintel.models import competitor, competitor_pricing, price_history, product, user  # noqa: F401


def init_db(bind: Engine = engine) -> None:
    import_models()
    Base.metadata.create_all(bind=bind)
