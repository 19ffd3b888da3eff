from __future__ import annotations

import pytest

from traveltalk.translation.models import RejectReason
from traveltalk.translation.validator import (
    VALIDATION_STEPS,
    count_percent_triplets,
    normalize_percent_artifacts,
    pick_valid_translation,
    validate_candidate,
)

SA = "ස"
SU = "සු"


def test_check_order() -> None:
    assert [step.__name__ for step in VALIDATION_STEPS] == [
        "check_identity",
        "check_still_encoded",
        "check_error_markers",
        "check_script_mix",
    ]


def test_identity_echo_is_rejected_case_insensitively() -> None:
    verdict = validate_candidate("hello", "  Hello ", "si")
    assert not verdict.accepted
    assert verdict.reason is RejectReason.IDENTICAL


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_candidate_is_a_provider_error(raw: str | None) -> None:
    assert validate_candidate("hello", raw, "si").reason is RejectReason.PROVIDER_ERROR


def test_spaced_percent_escapes_are_collapsed() -> None:
    assert normalize_percent_artifacts("%E0% B7% 83") == "%E0%B7%83"
    assert normalize_percent_artifacts("%E0%B7 %83") == "%E0%B7%83"


def test_two_escapes_are_still_encoded() -> None:
    verdict = validate_candidate("hello", "%E0%B7%83%E0%B7%94", "si")
    assert verdict.reason is RejectReason.STILL_ENCODED


def test_single_escape_is_tolerated() -> None:
    assert count_percent_triplets("100%25 sure") == 1
    verdict = validate_candidate("x", "100%25 sure", "en")
    assert verdict.accepted
    assert verdict.text == "100% sure"


def test_percent_followed_by_space_is_collapsed_in_plain_text() -> None:
    # Known quirk: the escape-artifact cleanup also glues "% " in ordinary text.
    verdict = validate_candidate("x", "100% sure", "en")
    assert verdict.accepted
    assert verdict.text == "100%sure"


def test_html_entities_are_decoded() -> None:
    assert pick_valid_translation("x", "Tom &amp; Jerry", "en") == "Tom & Jerry"


@pytest.mark.parametrize("raw", ["ERROR", "error", "Error 429 too many requests", "INVALID EMAIL PROVIDED"])
def test_error_markers_are_rejected(raw: str) -> None:
    assert validate_candidate("hello", raw, "en").reason is RejectReason.PROVIDER_ERROR


def test_error_marker_needs_word_boundary() -> None:
    assert validate_candidate("x", "terrorism", "en").accepted


def test_latin_heavy_sinhala_output_is_rejected() -> None:
    verdict = validate_candidate("hello there", f"hello {SA}", "si")
    assert verdict.reason is RejectReason.SCRIPT_MISMATCH


def test_equal_script_counts_are_rejected() -> None:
    assert validate_candidate("x", f"ab {SU}", "si").reason is RejectReason.SCRIPT_MISMATCH


def test_sinhala_majority_is_accepted() -> None:
    text = f"ab {SU}භ"
    assert validate_candidate("x", text, "si").text == text


def test_pure_sinhala_is_accepted_and_trimmed() -> None:
    assert pick_valid_translation("thank you", "  ස්තූතියි  ", "si") == "ස්තූතියි"


def test_latin_target_accepts_any_latin_word() -> None:
    # Mixed output passes for English targets even when Latin is the minority.
    assert validate_candidate("x", f"a {SU}භ", "en").accepted


def test_latin_target_rejects_pure_sinhala() -> None:
    assert validate_candidate("x", "ස්තූතියි", "en").reason is RejectReason.SCRIPT_MISMATCH


def test_latin_target_accepts_non_letter_output() -> None:
    assert validate_candidate("x", "123", "en-US").accepted


def test_decoded_identity_is_rejected() -> None:
    assert validate_candidate("a b", "a%20b", "fr").reason is RejectReason.IDENTICAL
