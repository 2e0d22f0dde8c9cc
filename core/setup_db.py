# core/setup_db.py

from sqlalchemy.exc import SQLAlchemyError

import models  # noqa: F401  (registers every table on Base.metadata)
from core.database import Base, Database
from core.errors import StorageFault
from core.logging_utils import get_logger, setup_logging

logger = get_logger(__name__)


def ensure_schema(database: Database) -> None:
    """Create patients/appointments/treatments/settings if absent.

    Idempotent. There is no migration path; a storage failure here is fatal.
    """
    try:
        Base.metadata.create_all(bind=database.engine)
    except SQLAlchemyError as e:
        logger.error("Schema creation failed for %s: %s", database.db_path, e)
        raise StorageFault("Could not create database schema", cause=e) from e
    logger.info("Database schema ready at %s", database.db_path)


def main():
    from services.seed_service import seed_if_empty

    setup_logging()
    print("Creating database tables...")

    database = Database()
    ensure_schema(database)

    # Insert demo data
    with database.session_scope() as db:
        seeded = seed_if_empty(db)

    print("Database initialized successfully." + (" Demo data inserted." if seeded else ""))

if __name__ == "__main__":
    main()
