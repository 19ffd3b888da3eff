"""
MyMemory translation adapters.

MyMemory is the GET-style provider: the text travels in the query string,
which keeps latency low but limits input length. Two adapters live here:

- MyMemoryProvider: one request for one language pair
- MyMemoryVariantsProvider: the variant cascade (exact pair, auto-detected
  source, region-qualified source, region-qualified target, and one more
  auto-detect try after a short pause), validating each answer
"""

import time
from typing import Any, Callable, Dict, List, Optional

import httpx

import traveltalk.language_codes as lc
from traveltalk.logger import get_logger
from traveltalk.providers.http import request_json
from traveltalk.translation.exceptions import (
    ProviderError,
    ProviderRejectedError,
    ProviderUnreachableError,
)
from traveltalk.translation.models import (
    ProviderKind,
    RejectReason,
    TranslationCandidate,
    TranslationRequest,
)
from traveltalk.translation.validator import pick_valid_translation

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.mymemory.translated.net/get"
DEFAULT_USER_AGENT = "TravelTalk/1.0 (Python)"


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def extract_best_match(result: Dict[str, Any], target_language: str) -> Optional[str]:
    """
    Pick the highest-quality entry of the "matches" array that validates.

    The request text is not known here, so the identity check never fires.
    """
    matches = result.get("matches")
    if not isinstance(matches, list):
        return None

    best_quality = -1
    best_text = None
    for match in matches:
        if not isinstance(match, dict):
            continue
        translation = match.get("translation")
        if not isinstance(translation, str):
            continue
        quality = _as_int(match.get("quality"))
        if quality > best_quality:
            valid = pick_valid_translation("", translation, target_language)
            if valid is not None:
                best_quality = quality
                best_text = valid
    return best_text


class MyMemoryProvider:
    """Single GET request against the MyMemory API."""

    kind = ProviderKind.MYMEMORY

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: Any = 10,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    @classmethod
    def from_config(cls, config: Dict[str, Any], transport: Optional[httpx.BaseTransport] = None):
        provider_config = config.get("mymemory", {})
        return cls(
            api_url=provider_config.get("api_url", DEFAULT_API_URL),
            timeout=provider_config.get("timeout", 10),
            user_agent=provider_config.get("user_agent", DEFAULT_USER_AGENT),
            transport=transport,
        )

    def build_params(self, request: TranslationRequest) -> Dict[str, str]:
        # mt=1 forces machine translation
        return {
            "q": request.text,
            "langpair": f"{request.source_language}|{request.target_language}",
            "mt": "1",
        }

    def attempt_translate(self, request: TranslationRequest) -> TranslationCandidate:
        logger.debug(f"Calling MyMemory ({request.source_language}|{request.target_language})")
        result = request_json(
            self.kind,
            "GET",
            self.api_url,
            timeout=self.timeout,
            transport=self.transport,
            params=self.build_params(request),
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
        )

        if not isinstance(result, dict):
            raise ProviderRejectedError(
                "Unexpected MyMemory response format", provider=self.kind, reason=RejectReason.PROVIDER_ERROR
            )

        status = _as_int(result.get("responseStatus"))
        if status != 200:
            raise ProviderRejectedError(
                f"MyMemory responseStatus {status}: {result.get('responseDetails', '')}",
                provider=self.kind,
                reason=RejectReason.PROVIDER_ERROR,
                details={"response_status": status},
            )

        data = result.get("responseData")
        translated = data.get("translatedText") if isinstance(data, dict) else None
        if isinstance(translated, str) and translated:
            return TranslationCandidate(raw_text=translated, provider=self.kind)

        best = extract_best_match(result, request.target_language)
        if best is not None:
            return TranslationCandidate(raw_text=best, provider=self.kind)

        raise ProviderRejectedError(
            "MyMemory returned no translation", provider=self.kind, reason=RejectReason.PROVIDER_ERROR
        )


class MyMemoryVariantsProvider:
    """Try several language-code spellings until MyMemory gives a valid answer."""

    kind = ProviderKind.MYMEMORY_VARIANTS

    def __init__(
        self,
        provider: MyMemoryProvider,
        sleep: Callable[[float], None] = time.sleep,
        retry_pause: float = 0.2,
    ):
        self.provider = provider
        self.sleep = sleep
        self.retry_pause = retry_pause

    def variants(self, request: TranslationRequest) -> List[TranslationRequest]:
        """Requests to send, in order. A pause precedes the last one."""
        source = request.source_language
        target = request.target_language

        attempts = [request, request.with_languages(source_language=lc.AUTO_DETECT)]

        source_alt = lc.locale_variant(source)
        if source_alt != source:
            attempts.append(request.with_languages(source_language=source_alt))

        target_alt = lc.locale_variant(target)
        if target_alt != target:
            attempts.append(request.with_languages(target_language=target_alt))

        attempts.append(request.with_languages(source_language=lc.AUTO_DETECT))
        return attempts

    def attempt_translate(self, request: TranslationRequest) -> TranslationCandidate:
        attempts = self.variants(request)
        unreachable = 0

        for index, variant in enumerate(attempts):
            if index == len(attempts) - 1:
                self.sleep(self.retry_pause)
            try:
                candidate = self.provider.attempt_translate(variant)
            except ProviderUnreachableError:
                unreachable += 1
                continue
            except ProviderError:
                continue

            text = pick_valid_translation(request.text, candidate.raw_text, request.target_language)
            if text is not None:
                return TranslationCandidate(raw_text=text, provider=self.kind)

        if unreachable == len(attempts):
            raise ProviderUnreachableError("MyMemory unreachable for every variant", provider=self.kind)
        raise ProviderRejectedError(
            "No MyMemory variant produced a valid translation",
            provider=self.kind,
            reason=RejectReason.PROVIDER_ERROR,
        )
