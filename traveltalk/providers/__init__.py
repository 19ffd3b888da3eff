"""
Translation provider adapters.

Each adapter wraps one third-party web translation API and exposes
attempt_translate(request) -> TranslationCandidate, raising a ProviderError
subclass when it has nothing to offer.
"""

from typing import Protocol

from traveltalk.translation.models import ProviderKind, TranslationCandidate, TranslationRequest
from traveltalk.providers.libretranslate import LibreTranslateCascade, LibreTranslateProvider
from traveltalk.providers.mymemory import MyMemoryProvider, MyMemoryVariantsProvider


class TranslationProvider(Protocol):
    kind: ProviderKind

    def attempt_translate(self, request: TranslationRequest) -> TranslationCandidate:
        ...


__all__ = [
    "TranslationProvider",
    "MyMemoryProvider",
    "MyMemoryVariantsProvider",
    "LibreTranslateProvider",
    "LibreTranslateCascade",
]
