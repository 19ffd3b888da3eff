"""
LibreTranslate translation adapters.

LibreTranslate is the POST-style provider, preferred for long input since
the text travels in the body. It only knows a fixed set of target languages
(see language_codes.LIBRETRANSLATE_LANGUAGES).
"""

from typing import Any, Dict, Optional

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

logger = get_logger(__name__)

DEFAULT_API_URL = "https://libretranslate.com/translate"
DEFAULT_MIRROR_URL = "https://libretranslate.de/translate"


class LibreTranslateProvider:
    """Single POST request against one LibreTranslate host."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        kind: ProviderKind = ProviderKind.LIBRETRANSLATE,
        timeout: Any = 10,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.kind = kind
        self.timeout = timeout
        self.transport = transport

    def build_body(self, request: TranslationRequest) -> Dict[str, str]:
        return {
            "q": request.text,
            "source": request.source_language,
            "target": request.target_language,
            "format": "text",
        }

    def attempt_translate(self, request: TranslationRequest) -> TranslationCandidate:
        logger.debug(f"Calling LibreTranslate at {self.api_url} ({request.source_language} -> {request.target_language})")
        result = request_json(
            self.kind,
            "POST",
            self.api_url,
            timeout=self.timeout,
            transport=self.transport,
            json=self.build_body(request),
            headers={"Accept": "application/json"},
        )

        translated = result.get("translatedText") if isinstance(result, dict) else None
        if isinstance(translated, str):
            return TranslationCandidate(raw_text=translated, provider=self.kind)

        raise ProviderRejectedError(
            f"No translatedText in {self.kind.value} response",
            provider=self.kind,
            reason=RejectReason.PROVIDER_ERROR,
        )


class LibreTranslateCascade:
    """
    Primary host, mirror, then both again with an auto-detected source.

    The first host that answers wins; its text is validated by the caller.
    """

    kind = ProviderKind.LIBRETRANSLATE

    def __init__(self, primary: LibreTranslateProvider, mirror: LibreTranslateProvider):
        self.primary = primary
        self.mirror = mirror

    @classmethod
    def from_config(cls, config: Dict[str, Any], transport: Optional[httpx.BaseTransport] = None):
        provider_config = config.get("libretranslate", {})
        timeout = provider_config.get("timeout", 10)
        primary = LibreTranslateProvider(
            api_url=provider_config.get("api_url", DEFAULT_API_URL),
            kind=ProviderKind.LIBRETRANSLATE,
            timeout=timeout,
            transport=transport,
        )
        mirror = LibreTranslateProvider(
            api_url=provider_config.get("mirror_url", DEFAULT_MIRROR_URL),
            kind=ProviderKind.LIBRETRANSLATE_MIRROR,
            timeout=timeout,
            transport=transport,
        )
        return cls(primary, mirror)

    def attempt_translate(self, request: TranslationRequest) -> TranslationCandidate:
        auto = request.with_languages(source_language=lc.AUTO_DETECT)
        attempts = [
            (self.primary, request),
            (self.mirror, request),
            (self.primary, auto),
            (self.mirror, auto),
        ]

        unreachable = 0
        for endpoint, variant in attempts:
            try:
                return endpoint.attempt_translate(variant)
            except ProviderUnreachableError:
                unreachable += 1
            except ProviderError:
                pass

        if unreachable == len(attempts):
            raise ProviderUnreachableError("LibreTranslate unreachable on every host", provider=self.kind)
        raise ProviderRejectedError(
            "LibreTranslate returned no translation",
            provider=self.kind,
            reason=RejectReason.PROVIDER_ERROR,
        )
