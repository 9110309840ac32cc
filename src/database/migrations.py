"""Database migration utilities."""

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session
from models import Base, Station
from stations.catalog import canonical_station_rows
import logging

logger = logging.getLogger(__name__)


def check_and_migrate(session: Session):
    """Check database schema and apply migrations if needed."""
    inspector = inspect(session.bind)
    existing_tables = inspector.get_table_names()

    missing_tables = set(Base.metadata.tables.keys()) - set(existing_tables)
    if missing_tables:
        logger.info(f"Creating missing tables: {missing_tables}")
        Base.metadata.create_all(bind=session.bind, tables=[
            Base.metadata.tables[table] for table in missing_tables
        ])

    if "schema_version" not in existing_tables:
        session.execute(text("""
            CREATE TABLE schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))
        session.commit()
        logger.info("Schema version table created")

    current_version = session.execute(text("SELECT MAX(version) FROM schema_version")).scalar() or 0

    for version, migration_func in sorted(get_migrations().items()):
        if version > current_version:
            logger.info(f"Applying migration version {version}")
            migration_func(session)
            session.execute(text("INSERT INTO schema_version (version) VALUES (:version)"), {"version": version})
            session.commit()

    logger.info("Database migrations complete")


def seed_canonical_stations(session: Session) -> int:
    """Insert canonical stations that are not present yet.

    Returns:
        Number of stations inserted
    """
    inserted = 0
    for row in canonical_station_rows():
        if session.get(Station, row["id"]) is None:
            session.add(Station(**row))
            inserted += 1
    session.flush()
    logger.info(f"Seeded {inserted} canonical stations")
    return inserted


def get_migrations():
    """Return dictionary of migration functions by version."""
    return {
        1: seed_canonical_stations,
    }
