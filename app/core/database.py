import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the engine and session factory for one application instance.

    Opened on startup and disposed on shutdown; nothing connects at import time.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    def connect(self) -> Engine:
        if self.engine is not None:
            return self.engine
        url = self.settings.DATABASE_URL
        if self.settings.is_sqlite:
            self.engine = create_engine(
                url,
                connect_args={
                    "check_same_thread": False,  # Allow SQLite to work with FastAPI
                    "timeout": self.settings.DB_CONNECT_TIMEOUT_SECONDS,
                },
            )

            # Apply PRAGMAs per connection
            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL;")
                cursor.execute("PRAGMA synchronous=NORMAL;")
                cursor.close()
        else:
            # Postgres or others
            self.engine = create_engine(
                url,
                pool_pre_ping=True,
                pool_timeout=self.settings.DB_POOL_TIMEOUT_SECONDS,
                connect_args={
                    "connect_timeout": self.settings.DB_CONNECT_TIMEOUT_SECONDS,
                    "options": f"-c statement_timeout={self.settings.DB_STATEMENT_TIMEOUT_MS}",
                },
            )
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database engine created for %s", self.engine.url.render_as_string(hide_password=True))
        return self.engine

    def create_all(self) -> None:
        # Import models so they register with Base
        from app import models  # noqa: F401

        Base.metadata.create_all(bind=self.connect())

    def session(self) -> Session:
        if self._sessionmaker is None:
            self.connect()
        return self._sessionmaker()

    def ping(self) -> bool:
        try:
            with self.connect().connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._sessionmaker = None


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
