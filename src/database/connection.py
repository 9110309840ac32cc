"""Database connection and session management."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from config import settings
from models import Base
from .migrations import check_and_migrate
import logging

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine = None
        self.SessionLocal = None

    def _ensure_sqlite_directory(self):
        """Create the directory holding a file-based SQLite database."""
        if not self.database_url.startswith("sqlite:///"):
            return

        if self.database_url.startswith("sqlite:////"):
            # Absolute path (four slashes)
            db_path = self.database_url.replace("sqlite:////", "/", 1)
        else:
            # Relative path (three slashes)
            db_path = self.database_url.replace("sqlite:///", "", 1)

        db_dir = Path(db_path).parent
        if db_path and db_path != ":memory:" and str(db_dir) != ".":
            db_dir.mkdir(parents=True, exist_ok=True)

    def initialize(self):
        """Initialize database connection, create tables and apply migrations."""
        is_sqlite = self.database_url.startswith("sqlite")
        if is_sqlite:
            self._ensure_sqlite_directory()

        # StaticPool keeps in-memory SQLite databases alive across sessions
        connect_args = {"check_same_thread": False} if is_sqlite else {}
        poolclass = StaticPool if is_sqlite else None

        self.engine = create_engine(
            self.database_url,
            connect_args=connect_args,
            poolclass=poolclass,
            echo=settings.database_echo
        )

        Base.metadata.create_all(bind=self.engine)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

        with self.get_session() as session:
            check_and_migrate(session)

        logger.info(f"Database initialized at {self.database_url}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session."""
        if not self.SessionLocal:
            self.initialize()

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close database connection."""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
            logger.info("Database connection closed")


# Global database manager instance
db_manager = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI to get database session."""
    with db_manager.get_session() as session:
        yield session
