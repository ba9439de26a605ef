"""
Database session management.
"""
import logging
import threading
from typing import Iterator, Optional

from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import ServiceUnavailable
from app.db.base import Base
import app.models  # noqa: F401  register tables on Base.metadata

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine and session factory for one database.

    The connection is established lazily and only once; later calls to
    `connect()` reuse the same engine. Until a connect succeeds the
    database reports itself as not ready.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self._sessionmaker is not None

    def connect(self) -> Engine:
        """Connect, verify the connection and create missing tables."""
        with self._lock:
            if self._engine is not None:
                return self._engine

            kwargs = {"pool_pre_ping": True, **self.engine_kwargs}
            if not self.url.startswith("sqlite"):
                kwargs.setdefault("pool_recycle", 3600)
            engine = create_engine(self.url, echo=self.echo, **kwargs)
            try:
                with engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
                Base.metadata.create_all(bind=engine)
            except SQLAlchemyError:
                engine.dispose()
                raise

            self._engine = engine
            self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            logger.info("Successfully connected to the database")
            return engine

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise ServiceUnavailable()
        return self._sessionmaker()

    def dispose(self):
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._sessionmaker = None


database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)


def get_database() -> Database:
    """Dependency returning the process-wide database."""
    return database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Dependency for getting database session."""
    if not database.is_ready:
        try:
            database.connect()
        except SQLAlchemyError as exc:
            logger.error(f"Database connection failed: {exc}")
            raise ServiceUnavailable() from exc

    db = database.session()
    try:
        yield db
    finally:
        db.close()
