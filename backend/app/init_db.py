"""Database initialization script using SQLAlchemy create_all().

Creates the account cache table. There are no migrations; the schema is a
single table that can be recreated at any time.
"""

import asyncio
import sys
from typing import NoReturn

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core import Base, db_manager, get_global_settings
from app.core.logging import setup_logging

# Register ORM models on Base.metadata
from app.features.players.orm_models import PlayerAccountORM  # noqa: F401

logger = structlog.get_logger(__name__)


async def init_db() -> None:
    """Create all tables defined in Base.metadata.

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    settings = get_global_settings()
    logger.info(
        "Initializing database",
        host=settings.postgres_host,
        database=settings.postgres_db,
    )
    try:
        async with db_manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await db_manager.close()

    logger.info(
        "Database initialization completed successfully",
        tables_created=len(Base.metadata.tables),
        table_names=list(Base.metadata.tables.keys()),
    )


async def drop_all_tables() -> None:
    """Drop all tables from the database.

    WARNING: This deletes the account cache.

    Raises:
        SQLAlchemyError: If database connection or table dropping fails
    """
    logger.warning("Dropping all database tables...")
    try:
        async with db_manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    except SQLAlchemyError as e:
        logger.error(
            "Failed to drop database tables",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await db_manager.close()

    logger.info("All database tables dropped successfully")


async def reset_db() -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database (drop + create)...")
    await drop_all_tables()
    await init_db()
    logger.info("Database reset completed successfully")


def main() -> NoReturn:
    """Run CLI for database initialization commands.

    Usage:
        python -m app.init_db [init|drop|reset]
    """
    settings = get_global_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)
    command = sys.argv[1] if len(sys.argv) > 1 else "init"

    if command == "init":
        asyncio.run(init_db())
    elif command == "drop":
        asyncio.run(drop_all_tables())
    elif command == "reset":
        asyncio.run(reset_db())
    else:
        logger.error("Unknown command", command=command)
        print("Usage: python -m app.init_db [init|drop|reset]")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
