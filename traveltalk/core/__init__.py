"""
Core module - Persistence utilities

This module provides:
- database: CRUD operations for saved phrases and app config
- schema: Database initialization and migrations
- phrases: SavedPhrasesStore built on the database
"""

from traveltalk.core.database import (
    DB_FILE,
    get_connection,
    # Saved phrase operations
    create_saved_phrase,
    get_all_saved_phrases,
    get_saved_phrase,
    delete_saved_phrase,
    delete_saved_phrases,
    # App config operations
    get_app_config,
    set_app_config,
)

from traveltalk.core.schema import (
    DB_VERSION,
    get_db_version,
    set_db_version,
    initialize_database,
    ensure_all_schemas,
    migrate_database,
)
