"""
Database initialization and connection management.
"""

import logging
from pathlib import Path
from sqlalchemy import create_engine, event, Index
from sqlalchemy.orm import sessionmaker

from benefitscout.config import settings
from benefitscout.ingest.schema import Base, Offer, UserProgram, UsageHistory, SearchLog


logger = logging.getLogger(__name__)


def get_engine(db_path=None):
    """Get SQLAlchemy engine for database connection."""
    if db_path is None:
        db_path = settings.database_path

    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f'sqlite:///{db_path}',
        connect_args={'check_same_thread': False},
        echo=False  # Set to True for SQL debugging
    )

    # Enable foreign key constraints
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def get_session_factory(engine=None):
    """Get a session factory bound to an engine."""
    if engine is None:
        engine = get_engine()
    return sessionmaker(bind=engine)


def get_session(engine=None):
    """Get SQLAlchemy session."""
    return get_session_factory(engine)()


def create_indexes(engine):
    """Create indexes for common query patterns."""

    # Offer indexes
    Index('idx_offers_priority', Offer.priority_score).create(engine, checkfirst=True)
    Index('idx_offers_category', Offer.category_id).create(engine, checkfirst=True)
    Index('idx_offers_program', Offer.program_id).create(engine, checkfirst=True)

    # User indexes
    Index('idx_user_programs_user', UserProgram.user_id).create(engine, checkfirst=True)
    Index('idx_usage_history_user', UsageHistory.user_id).create(engine, checkfirst=True)

    # Analytics indexes
    Index('idx_search_logs_created', SearchLog.created_at).create(engine, checkfirst=True)


def init_database(db_path=None, drop_existing=False):
    """
    Initialize database schema.

    Args:
        db_path: Path to database file (uses configured path if None)
        drop_existing: If True, drop all tables before creating

    Returns:
        SQLAlchemy engine
    """
    engine = get_engine(db_path)

    if drop_existing:
        logger.info("Dropping existing tables...")
        Base.metadata.drop_all(engine)

    Base.metadata.create_all(engine)
    create_indexes(engine)

    logger.info(f"Database initialized at: {db_path or settings.database_path}")

    return engine


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database(drop_existing=True)
