"""
Database initialization script
Creates all tables and removes digests stored twice for the same week
"""
from loguru import logger

from sfpulse.database import SessionLocal, init_db
from sfpulse.repositories import cleanup_duplicate_weeks


def init_database():
    """Initialize database with all tables, then deduplicate weekly digests"""
    logger.info("Creating database tables...")
    init_db()
    logger.info("Database tables created successfully")

    db = SessionLocal()
    try:
        deleted = cleanup_duplicate_weeks(db)
        if deleted:
            logger.info(f"Removed {deleted} duplicate weekly news rows")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_database()
    logger.info("Database initialization complete!")
