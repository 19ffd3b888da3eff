"""
Database CRUD Operations Module

This module handles all database CRUD operations for:
- Saved Phrases
- App Config

For schema management and migrations, see core/schema.py
"""

import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any

DB_FILE = Path(os.environ.get("TRAVELTALK_DB") or Path(__file__).parent.parent / "traveltalk.db")


def get_connection():
    """Get a database connection."""
    return sqlite3.connect(DB_FILE)


# ============================================================
# Saved Phrase CRUD Operations
# ============================================================

def create_saved_phrase(phrase_id: str, source_lang: str, target_lang: str,
                        input_text: str, output_text: str, created_at: datetime) -> int:
    """Insert a saved phrase and return its sequence number."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO saved_phrases (id, source_lang, target_lang, input, output, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (phrase_id, source_lang, target_lang, input_text, output_text, created_at.isoformat()))
        conn.commit()
        return cursor.lastrowid


def get_all_saved_phrases() -> List[Dict[str, Any]]:
    """Get all saved phrases, most recently saved first."""
    with get_connection() as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM saved_phrases ORDER BY seq DESC")
        return [dict(row) for row in cursor.fetchall()]


def get_saved_phrase(phrase_id: str) -> Optional[Dict[str, Any]]:
    """Get a saved phrase by ID."""
    with get_connection() as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM saved_phrases WHERE id = ?", (phrase_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def delete_saved_phrase(phrase_id: str) -> bool:
    """Delete a saved phrase. Returns True if a row was removed."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM saved_phrases WHERE id = ?", (phrase_id,))
        conn.commit()
        return cursor.rowcount > 0


def delete_saved_phrases(phrase_ids: List[str]) -> int:
    """Delete several saved phrases in one transaction."""
    if not phrase_ids:
        return 0
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.executemany("DELETE FROM saved_phrases WHERE id = ?", [(pid,) for pid in phrase_ids])
        conn.commit()
        return cursor.rowcount


# ============================================================
# App Config CRUD Operations
# ============================================================

def get_app_config(key: str) -> Optional[str]:
    """Get a configuration value by key."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM app_config WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None


def set_app_config(key: str, value: str):
    """Set a configuration value."""
    with get_connection() as conn:
        cursor = conn.cursor()
        # Ensure app_config table exists
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_config (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        cursor.execute("""
            INSERT OR REPLACE INTO app_config (key, value, updated_at)
            VALUES (?, ?, ?)
        """, (key, value, datetime.now().isoformat()))
        conn.commit()
