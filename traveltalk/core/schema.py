"""
Database Schema Management Module

This module handles database initialization, schema validation, and migrations.
For CRUD operations, see core/database.py
"""

import sqlite3

# Import database module to use DB_FILE and get_connection dynamically
# This ensures monkeypatching in tests works correctly
import traveltalk.core.database as db

DB_VERSION = 2  # Increment when schema changes (created_at index on saved_phrases in v2)


def get_connection():
    """Get a database connection using the database module's DB_FILE."""
    return db.get_connection()


def get_db_version() -> int:
    """Get current database version."""
    try:
        with get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT version FROM db_version LIMIT 1")
            row = cursor.fetchone()
            return row[0] if row else 0
    except sqlite3.OperationalError:
        return 0


def set_db_version(version: int):
    """Set database version."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS db_version (version INTEGER)")
        cursor.execute("DELETE FROM db_version")
        cursor.execute("INSERT INTO db_version (version) VALUES (?)", (version,))
        conn.commit()


def initialize_database():
    """Initializes the database and creates the tables."""
    from traveltalk.logger import get_logger
    logger = get_logger(__name__)

    if db.DB_FILE.exists():
        current_version = get_db_version()
        if current_version < DB_VERSION:
            migrate_database(current_version, DB_VERSION)
        else:
            try:
                ensure_all_schemas()
            except Exception as e:
                logger.warning(f"Failed to verify database schema: {e}")
        return

    db.DB_FILE.parent.mkdir(parents=True, exist_ok=True)
    ensure_all_schemas()
    set_db_version(DB_VERSION)
    logger.info(f"Created database at {db.DB_FILE}")


# ============================================================
# Database Schema Validation
# ============================================================

def ensure_saved_phrases_schema():
    """Ensure the saved_phrases table exists."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("""
        CREATE TABLE IF NOT EXISTS saved_phrases (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            source_lang TEXT NOT NULL,
            target_lang TEXT NOT NULL,
            input TEXT NOT NULL,
            output TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL
        )
        """)
        conn.commit()


def ensure_app_config_schema():
    """Ensure the app_config table exists."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """)
        conn.commit()


def ensure_database_indexes():
    """Create indexes used by the phrase list queries."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_saved_phrases_created_at ON saved_phrases (created_at)"
        )
        conn.commit()


def ensure_all_schemas():
    """Ensure every table and index exists."""
    ensure_saved_phrases_schema()
    ensure_app_config_schema()
    ensure_database_indexes()


def migrate_database(from_version: int, to_version: int):
    """Migrate database from one version to another."""
    from traveltalk.logger import get_logger
    logger = get_logger(__name__)

    logger.info(f"Migrating database from version {from_version} to {to_version}")

    if from_version < 1:
        ensure_saved_phrases_schema()
        ensure_app_config_schema()

    if from_version < 2:
        ensure_database_indexes()

    set_db_version(to_version)
    logger.info("Database migration complete")
