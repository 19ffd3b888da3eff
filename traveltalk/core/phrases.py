"""
Saved phrases store.

Phrases are created when the user saves a successful translation and are
listed newest first. The resolver never touches this store.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from traveltalk.core import database as db
from traveltalk.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SavedPhrase:
    id: str
    source_lang: str
    target_lang: str
    input: str
    output: str
    date: datetime

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SavedPhrase":
        return cls(
            id=row["id"],
            source_lang=row["source_lang"],
            target_lang=row["target_lang"],
            input=row["input"],
            output=row["output"],
            date=datetime.fromisoformat(row["created_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["date"] = self.date.isoformat()
        return payload


class SavedPhrasesStore:
    """Persistent, newest-first list of saved translations."""

    def __init__(self):
        self._phrases: List[SavedPhrase] = []
        self.load()

    @property
    def phrases(self) -> List[SavedPhrase]:
        return list(self._phrases)

    def load(self) -> None:
        self._phrases = [SavedPhrase.from_row(row) for row in db.get_all_saved_phrases()]

    def add(self, source_lang: str, target_lang: str, input: str, output: str) -> Optional[SavedPhrase]:
        """
        Save a phrase at the head of the list.

        Returns None without saving when either side is blank after trimming.
        """
        trimmed_in = (input or "").strip()
        trimmed_out = (output or "").strip()
        if not trimmed_in or not trimmed_out:
            return None

        item = SavedPhrase(
            id=str(uuid.uuid4()),
            source_lang=source_lang,
            target_lang=target_lang,
            input=trimmed_in,
            output=trimmed_out,
            date=datetime.now(),
        )
        db.create_saved_phrase(item.id, item.source_lang, item.target_lang, item.input, item.output, item.date)
        self._phrases.insert(0, item)
        logger.debug(f"Saved phrase {item.id} ({source_lang} -> {target_lang})")
        return item

    def remove(self, phrase_id: str) -> bool:
        removed = db.delete_saved_phrase(phrase_id)
        if removed:
            self._phrases = [p for p in self._phrases if p.id != phrase_id]
        return removed

    def remove_at(self, offsets: Iterable[int]) -> None:
        """Remove phrases by their positions in the current list."""
        positions = set(offsets)
        doomed = [p.id for i, p in enumerate(self._phrases) if i in positions]
        db.delete_saved_phrases(doomed)
        self._phrases = [p for i, p in enumerate(self._phrases) if i not in positions]
