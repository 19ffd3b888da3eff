from __future__ import annotations

from typing import List

import httpx
import pytest

from conftest import (
    LIBRE_HOST,
    LIBRE_MIRROR_HOST,
    FakeProviders,
    echo_mymemory,
    libre_response,
    mymemory_response,
)
from traveltalk.providers import (
    LibreTranslateCascade,
    LibreTranslateProvider,
    MyMemoryProvider,
    MyMemoryVariantsProvider,
)
from traveltalk.providers.http import get_httpx_timeout
from traveltalk.translation.exceptions import ProviderRejectedError, ProviderUnreachableError
from traveltalk.translation.models import ProviderKind, TranslationRequest

EN_SI = TranslationRequest(text="hello", source_language="en", target_language="si")
EN_FR = TranslationRequest(text="hello", source_language="en", target_language="fr")


def _mymemory(fake: FakeProviders) -> MyMemoryProvider:
    return MyMemoryProvider(transport=fake.transport)


def test_timeout_config() -> None:
    assert get_httpx_timeout(5).read == 5.0
    assert get_httpx_timeout(None).connect == 10.0
    assert get_httpx_timeout({"read": 30}).read == 30


# ============================================================
# MyMemory
# ============================================================

def test_mymemory_query_parameters(fake: FakeProviders) -> None:
    headers: List[httpx.Headers] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers)
        return mymemory_response("හෙලෝ")

    fake.mymemory = handler
    candidate = _mymemory(fake).attempt_translate(EN_SI)

    assert candidate.raw_text == "හෙලෝ"
    assert candidate.provider is ProviderKind.MYMEMORY
    assert fake.calls[0].params == {"q": "hello", "langpair": "en|si", "mt": "1"}
    assert headers[0]["user-agent"].startswith("TravelTalk/")


def test_mymemory_string_status_is_accepted(fake: FakeProviders) -> None:
    fake.mymemory = lambda request: mymemory_response("හෙලෝ", status="200")
    assert _mymemory(fake).attempt_translate(EN_SI).raw_text == "හෙලෝ"


def test_mymemory_non_200_status_is_rejected(fake: FakeProviders) -> None:
    fake.mymemory = lambda request: mymemory_response("QUOTA EXCEEDED", status=403)
    with pytest.raises(ProviderRejectedError) as excinfo:
        _mymemory(fake).attempt_translate(EN_SI)
    assert excinfo.value.details == {"response_status": 403}


def test_mymemory_falls_back_to_best_valid_match(fake: FakeProviders) -> None:
    matches = [
        {"translation": "%E0%B7%83%E0%B7%94", "quality": "100"},
        {"translation": "හෙලෝ", "quality": "70"},
        {"translation": "හයි", "quality": 50},
        {"translation": None, "quality": 99},
    ]
    fake.mymemory = lambda request: mymemory_response("", matches=matches)
    assert _mymemory(fake).attempt_translate(EN_SI).raw_text == "හෙලෝ"


def test_mymemory_without_any_text_is_rejected(fake: FakeProviders) -> None:
    fake.mymemory = lambda request: mymemory_response("", matches=[])
    with pytest.raises(ProviderRejectedError):
        _mymemory(fake).attempt_translate(EN_SI)


def test_mymemory_http_error_is_unreachable(fake: FakeProviders) -> None:
    fake.mymemory = lambda request: httpx.Response(503, json={"responseDetails": "busy"})
    with pytest.raises(ProviderUnreachableError) as excinfo:
        _mymemory(fake).attempt_translate(EN_SI)
    assert excinfo.value.details == {"status_code": 503}
    assert "busy" in str(excinfo.value)


def test_mymemory_timeout_is_unreachable(fake: FakeProviders) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    fake.mymemory = handler
    with pytest.raises(ProviderUnreachableError):
        _mymemory(fake).attempt_translate(EN_SI)


def test_mymemory_non_json_body_is_rejected(fake: FakeProviders) -> None:
    fake.mymemory = lambda request: httpx.Response(200, text="<html>oops</html>")
    with pytest.raises(ProviderRejectedError):
        _mymemory(fake).attempt_translate(EN_SI)


# ============================================================
# MyMemory variants
# ============================================================

def test_variant_order_for_sinhala_target() -> None:
    variants = MyMemoryVariantsProvider(MyMemoryProvider()).variants(EN_SI)
    pairs = [(v.source_language, v.target_language) for v in variants]
    assert pairs == [("en", "si"), ("auto", "si"), ("en", "si-LK"), ("auto", "si")]


def test_variant_order_for_sinhala_source() -> None:
    request = TranslationRequest(text="හෙලෝ", source_language="si", target_language="en")
    variants = MyMemoryVariantsProvider(MyMemoryProvider()).variants(request)
    pairs = [(v.source_language, v.target_language) for v in variants]
    assert pairs == [("si", "en"), ("auto", "en"), ("si-LK", "en"), ("auto", "en")]


def test_variants_skip_echoed_answers(fake: FakeProviders) -> None:
    answers = iter(["hello", "හෙලෝ"])
    fake.mymemory = lambda request: mymemory_response(next(answers))
    sleeps: List[float] = []

    provider = MyMemoryVariantsProvider(_mymemory(fake), sleep=sleeps.append)
    candidate = provider.attempt_translate(EN_SI)

    assert candidate.raw_text == "හෙලෝ"
    assert candidate.provider is ProviderKind.MYMEMORY_VARIANTS
    assert [c.params["langpair"] for c in fake.calls] == ["en|si", "auto|si"]
    assert sleeps == []


def test_variants_all_unreachable(fake: FakeProviders) -> None:
    sleeps: List[float] = []
    provider = MyMemoryVariantsProvider(_mymemory(fake), sleep=sleeps.append, retry_pause=0.2)

    with pytest.raises(ProviderUnreachableError):
        provider.attempt_translate(EN_SI)
    assert len(fake.calls) == 4
    assert sleeps == [0.2]


def test_variants_all_echoed_is_rejected(fake: FakeProviders) -> None:
    fake.mymemory = echo_mymemory
    provider = MyMemoryVariantsProvider(_mymemory(fake), sleep=lambda seconds: None)

    with pytest.raises(ProviderRejectedError):
        provider.attempt_translate(EN_FR)
    assert len(fake.calls) == 3


# ============================================================
# LibreTranslate
# ============================================================

def test_libre_request_body(fake: FakeProviders) -> None:
    fake.libre = lambda request: libre_response("bonjour")
    candidate = LibreTranslateProvider(transport=fake.transport).attempt_translate(EN_FR)

    assert candidate.raw_text == "bonjour"
    assert candidate.provider is ProviderKind.LIBRETRANSLATE
    assert fake.calls[0].body == {"q": "hello", "source": "en", "target": "fr", "format": "text"}


def test_libre_missing_text_is_rejected(fake: FakeProviders) -> None:
    fake.libre = lambda request: httpx.Response(200, json={"error": "Invalid API key"})
    with pytest.raises(ProviderRejectedError):
        LibreTranslateProvider(transport=fake.transport).attempt_translate(EN_FR)


def test_libre_cascade_uses_mirror(fake: FakeProviders) -> None:
    fake.libre = lambda request: httpx.Response(500)
    fake.libre_mirror = lambda request: libre_response("bonjour")

    cascade = LibreTranslateCascade.from_config({}, transport=fake.transport)
    candidate = cascade.attempt_translate(EN_FR)

    assert candidate.provider is ProviderKind.LIBRETRANSLATE_MIRROR
    assert fake.hosts() == [LIBRE_HOST, LIBRE_MIRROR_HOST]


def test_libre_cascade_order_when_everything_fails(fake: FakeProviders) -> None:
    cascade = LibreTranslateCascade.from_config({}, transport=fake.transport)

    with pytest.raises(ProviderUnreachableError):
        cascade.attempt_translate(EN_FR)

    assert [(c.host, c.body["source"]) for c in fake.calls] == [
        (LIBRE_HOST, "en"),
        (LIBRE_MIRROR_HOST, "en"),
        (LIBRE_HOST, "auto"),
        (LIBRE_MIRROR_HOST, "auto"),
    ]


def test_libre_cascade_mixed_failures_are_rejected(fake: FakeProviders) -> None:
    fake.libre = lambda request: httpx.Response(200, json={})
    cascade = LibreTranslateCascade.from_config({}, transport=fake.transport)

    with pytest.raises(ProviderRejectedError):
        cascade.attempt_translate(EN_FR)
    assert len(fake.calls) == 4
