"""Value types passed between the resolver, providers and validator."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ProviderKind(str, Enum):
    MYMEMORY = "mymemory"
    MYMEMORY_VARIANTS = "mymemory_variants"
    LIBRETRANSLATE = "libretranslate"
    LIBRETRANSLATE_MIRROR = "libretranslate_mirror"
    LOCAL_DICTIONARY = "local_dictionary"


class RejectReason(str, Enum):
    IDENTICAL = "identical"
    STILL_ENCODED = "still_encoded"
    PROVIDER_ERROR = "provider_error"
    SCRIPT_MISMATCH = "script_mismatch"


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    source_language: str
    target_language: str

    def with_languages(self, source_language: Optional[str] = None,
                       target_language: Optional[str] = None) -> "TranslationRequest":
        return replace(
            self,
            source_language=source_language or self.source_language,
            target_language=target_language or self.target_language,
        )

    def with_text(self, text: str) -> "TranslationRequest":
        return replace(self, text=text)


@dataclass(frozen=True)
class TranslationCandidate:
    raw_text: str
    provider: ProviderKind


@dataclass(frozen=True)
class ValidationVerdict:
    """Either an accepted, decoded text or a rejection reason. Never both."""

    text: Optional[str] = None
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def accept(cls, text: str) -> "ValidationVerdict":
        return cls(text=text)

    @classmethod
    def reject(cls, reason: RejectReason) -> "ValidationVerdict":
        return cls(reason=reason)


@dataclass(frozen=True)
class TranslationResult:
    text: str
    provider: ProviderKind

    def to_dict(self):
        return {"text": self.text, "provider": self.provider.value}
