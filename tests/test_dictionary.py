from __future__ import annotations

import pytest

from traveltalk.translation.dictionary import lookup, normalize_key


@pytest.mark.parametrize("text", ["thank you", "  Thank you! ", "THANK YOU.", "(thank you)"])
def test_english_to_sinhala(text: str) -> None:
    assert lookup(text, "en", "si") == "ස්තූතියි"


def test_region_qualified_codes_use_the_base_language() -> None:
    assert lookup("hello", "en-US", "si-LK") == "හෙලෝ"


def test_sinhala_to_english() -> None:
    assert lookup("ආයුබෝවන්", "si", "en") == "hello"
    assert lookup("මට බඩගිනිය", "si", "en") == "i am hungry"


def test_unknown_pair_or_phrase() -> None:
    assert lookup("thank you", "en", "fr") is None
    assert lookup("thank you, friend", "en", "si") is None


def test_normalize_key_strips_punctuation_and_case() -> None:
    assert normalize_key("  Good Morning!? ") == "good morning"
    assert normalize_key("sorry\n") == "sorry"
