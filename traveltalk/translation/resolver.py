"""
Translation resolver.

Runs a request through the provider cascade:

1. up to two whole-text providers, ordered by text length and by whether
   LibreTranslate supports the target language
2. on the short path only: a paused MyMemory retry, then chunked translation
3. the static phrase dictionary

Every provider failure is swallowed and the next stage tried. Only total
exhaustion reaches the caller, as ResolutionExhaustedError.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

import traveltalk.language_codes as lc
from traveltalk.config import load_config
from traveltalk.logger import get_logger
from traveltalk.providers import (
    LibreTranslateCascade,
    MyMemoryProvider,
    MyMemoryVariantsProvider,
    TranslationProvider,
)
from traveltalk.translation import dictionary
from traveltalk.translation.chunking import translate_by_chunks
from traveltalk.translation.exceptions import (
    EmptyInputError,
    ProviderError,
    ProviderUnreachableError,
    ResolutionExhaustedError,
)
from traveltalk.translation.models import (
    ProviderKind,
    TranslationRequest,
    TranslationResult,
)
from traveltalk.translation.validator import validate_candidate

logger = get_logger(__name__)

EXHAUSTED_MESSAGE = "Translation failed. Try again in a moment."


def run_cascade(
    providers: Sequence[TranslationProvider],
    request: TranslationRequest,
    attempts: Optional[List[Dict[str, Any]]] = None,
) -> Optional[TranslationResult]:
    """
    Try each provider in order and return the first validated result.

    Args:
        providers: Adapters to try, in order
        request: What to translate
        attempts: Optional list that receives one outcome record per provider

    Returns:
        TranslationResult, or None if every provider failed or was rejected
    """
    for provider in providers:
        try:
            candidate = provider.attempt_translate(request)
        except ProviderError as e:
            outcome = "unreachable" if isinstance(e, ProviderUnreachableError) else "rejected"
            logger.debug(f"{provider.kind.value} {outcome}: {e}")
            if attempts is not None:
                attempts.append({"provider": provider.kind.value, "outcome": outcome, "reason": e.code})
            continue

        verdict = validate_candidate(request.text, candidate.raw_text, request.target_language)
        if verdict.accepted:
            return TranslationResult(text=verdict.text, provider=candidate.provider)

        logger.debug(f"{candidate.provider.value} candidate rejected: {verdict.reason.value}")
        if attempts is not None:
            attempts.append({
                "provider": candidate.provider.value,
                "outcome": "rejected",
                "reason": verdict.reason.value,
            })
    return None


class TranslationResolver:
    """Resolve text through providers, chunking and the phrase dictionary."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_state_change: Optional[Callable[[bool], None]] = None,
    ):
        self.config = config if config is not None else load_config()
        translation_config = self.config.get("translation", {})

        self.long_text_threshold = translation_config.get("long_text_threshold", 200)
        self.retry_pause = translation_config.get("retry_pause", 0.3)
        self.segment_pause = translation_config.get("segment_pause", 0.12)
        self.word_pause = translation_config.get("word_pause", 0.1)
        self.libre_languages = (
            self.config.get("libretranslate", {}).get("supported_languages")
            or lc.LIBRETRANSLATE_LANGUAGES
        )

        self.sleep = sleep
        self.on_state_change = on_state_change
        self._busy = False

        self.mymemory = MyMemoryVariantsProvider(
            MyMemoryProvider.from_config(self.config, transport=transport),
            sleep=sleep,
            retry_pause=translation_config.get("variant_retry_pause", 0.2),
        )
        self.libretranslate = LibreTranslateCascade.from_config(self.config, transport=transport)

    @property
    def busy(self) -> bool:
        return self._busy

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        if self.on_state_change:
            self.on_state_change(busy)

    def is_long(self, request: TranslationRequest) -> bool:
        return len(request.text) > self.long_text_threshold

    def can_use_libre(self, request: TranslationRequest) -> bool:
        return lc.libre_supports(request.target_language, self.libre_languages)

    def is_short_path(self, request: TranslationRequest) -> bool:
        return not (self.is_long(request) and self.can_use_libre(request))

    def provider_order(self, request: TranslationRequest) -> List[TranslationProvider]:
        """Whole-text providers to try, in order."""
        if not self.is_short_path(request):
            # POST body avoids the GET provider's URL length limit
            return [self.libretranslate, self.mymemory]

        order: List[TranslationProvider] = [self.mymemory]
        if self.can_use_libre(request):
            order.append(self.libretranslate)
        return order

    def build_request(self, text: str, source_language: str, target_language: str) -> TranslationRequest:
        q = (text or "").strip()
        if not q:
            raise EmptyInputError("Nothing to translate")
        return TranslationRequest(
            text=q,
            source_language=lc.normalize_language(source_language) or source_language.strip(),
            target_language=lc.normalize_language(target_language) or target_language.strip(),
        )

    def resolve(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate text, returning the accepted translation.

        Raises:
            EmptyInputError: text is blank; no network call is made
            ResolutionExhaustedError: every stage failed
        """
        return self.resolve_result(text, source_language, target_language).text

    def resolve_result(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """Like resolve, but also reports which provider produced the text."""
        request = self.build_request(text, source_language, target_language)

        self._set_busy(True)
        try:
            return self._resolve(request)
        finally:
            self._set_busy(False)

    def _resolve(self, request: TranslationRequest) -> TranslationResult:
        logger.info(
            f"Resolving {len(request.text)} chars {request.source_language} -> {request.target_language}"
        )
        attempts: List[Dict[str, Any]] = []

        result = run_cascade(self.provider_order(request), request, attempts)
        if result is not None:
            return self._done(result)

        if self.is_short_path(request):
            # Transient rate limits usually clear within a moment
            self.sleep(self.retry_pause)
            result = run_cascade([self.mymemory], request, attempts)
            if result is not None:
                return self._done(result)

            chunked = translate_by_chunks(
                request,
                self.mymemory,
                sleep=self.sleep,
                segment_pause=self.segment_pause,
                word_pause=self.word_pause,
            )
            verdict = validate_candidate(request.text, chunked, request.target_language)
            if verdict.accepted:
                return self._done(TranslationResult(text=verdict.text, provider=ProviderKind.MYMEMORY_VARIANTS))
            attempts.append({"provider": "chunked", "outcome": "rejected", "reason": verdict.reason.value})

        local = dictionary.lookup(request.text, request.source_language, request.target_language)
        if local is not None:
            return self._done(TranslationResult(text=local, provider=ProviderKind.LOCAL_DICTIONARY))
        attempts.append({"provider": ProviderKind.LOCAL_DICTIONARY.value, "outcome": "rejected", "reason": "no_entry"})

        logger.warning(f"Translation exhausted after {len(attempts)} attempt(s)")
        raise ResolutionExhaustedError(
            EXHAUSTED_MESSAGE,
            details={
                "attempts": attempts,
                "all_unreachable": all(a["outcome"] == "unreachable" for a in attempts if a["provider"] in _NETWORK_KINDS),
            },
        )

    def _done(self, result: TranslationResult) -> TranslationResult:
        logger.info(f"Translation accepted from {result.provider.value}")
        return result


_NETWORK_KINDS = frozenset({
    ProviderKind.MYMEMORY.value,
    ProviderKind.MYMEMORY_VARIANTS.value,
    ProviderKind.LIBRETRANSLATE.value,
    ProviderKind.LIBRETRANSLATE_MIRROR.value,
})
