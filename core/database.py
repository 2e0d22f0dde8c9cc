import os
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from core import config
from core.errors import StorageFault
from core.logging_utils import get_logger

logger = get_logger(__name__)

# Base class for all models
Base = declarative_base()


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owned storage handle: one engine + session factory per database file.

    Built once at process start and handed to the repository, instead of
    living as module-level globals.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or config.DB_PATH
        if self.db_path != ":memory:":
            db_dir = os.path.dirname(self.db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)

        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
        )
        event.listen(self.engine, "connect", _enable_foreign_keys)

        # Session factory
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    @contextmanager
    def session_scope(self):
        """
        Transaction scope: commits on success, rolls back on any error.

        SQLAlchemy errors are logged and re-raised as StorageFault.

        Usage:
            with database.session_scope() as db:
                db.add(obj)
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Storage operation failed: %s", e)
            raise StorageFault("Storage operation failed", cause=e) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
