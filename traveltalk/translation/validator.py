"""
Translation Validation Module

Providers regularly hand back junk: the input echoed unchanged, text that is
still percent-encoded (sometimes with stray spaces inside the escapes, like
"%E0% B7% 83"), error pages, or Sinhala output polluted by untranslated
English. The validator decodes a raw candidate and runs it through an
ordered list of checks:

1. normalize stray percent-encoding artifacts
2. percent-decode, then decode HTML entities
3. identity check
4. still-encoded check
5. error-marker check
6. script-mix check

The first check that objects rejects the candidate.
"""

import html
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from urllib.parse import unquote

import traveltalk.language_codes as lc
from traveltalk.logger import get_logger
from traveltalk.translation.models import RejectReason, ValidationVerdict

logger = get_logger(__name__)

PERCENT_TRIPLET = re.compile(r"%[0-9A-Fa-f]{2}")
_SPACE_BETWEEN_TRIPLETS = re.compile(r"(%[0-9A-Fa-f]{2})\s+(?=%[0-9A-Fa-f]{2})")
_LATIN_LETTER = re.compile(r"[A-Za-z]")

SINHALA_BLOCK = (0x0D80, 0x0DFF)

# Matched against the upper-cased candidate
ERROR_MARKERS = ("INVALID EMAIL", "ERROR ")
ERROR_EXACT = "ERROR"

MIN_ENCODED_TRIPLETS = 2


# ============================================================
# Decoding
# ============================================================

def normalize_percent_artifacts(text: str) -> str:
    """Collapse whitespace inside and between %XX escapes."""
    out = text.replace("% ", "%")
    return _SPACE_BETWEEN_TRIPLETS.sub(r"\1", out)


def percent_decode(text: str) -> str:
    """Percent-decode as UTF-8, keeping the input when it does not decode cleanly."""
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        return text


def decode_html_entities(text: str) -> str:
    decoded = html.unescape(text).strip()
    return decoded if decoded else text


def count_percent_triplets(text: str) -> int:
    return len(PERCENT_TRIPLET.findall(text))


def is_likely_percent_encoded(text: str) -> bool:
    return "%" in text and count_percent_triplets(text) >= MIN_ENCODED_TRIPLETS


# ============================================================
# Script detection
# ============================================================

def _is_sinhala(ch: str) -> bool:
    return SINHALA_BLOCK[0] <= ord(ch) <= SINHALA_BLOCK[1]


def _is_latin(ch: str) -> bool:
    return ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def count_sinhala(text: str) -> int:
    return sum(1 for ch in text if _is_sinhala(ch))


def count_latin(text: str) -> int:
    return sum(1 for ch in text if _is_latin(ch))


def contains_sinhala(text: str) -> bool:
    return any(_is_sinhala(ch) for ch in text)


def contains_latin(text: str) -> bool:
    return any(_is_latin(ch) for ch in text)


def has_latin_word(text: str) -> bool:
    return any(_LATIN_LETTER.search(token) for token in text.split(" "))


# ============================================================
# Checks
# ============================================================

@dataclass(frozen=True)
class DecodedCandidate:
    original: str
    raw: str
    normalized: str
    decoded: str
    target_language: str


def decode_candidate(original: str, raw: str, target_language: str) -> DecodedCandidate:
    normalized = normalize_percent_artifacts(raw)
    decoded = decode_html_entities(percent_decode(normalized))
    return DecodedCandidate(
        original=original,
        raw=raw,
        normalized=normalized,
        decoded=decoded,
        target_language=target_language,
    )


def check_identity(candidate: DecodedCandidate) -> Optional[RejectReason]:
    """The provider echoed the input back instead of translating it."""
    if candidate.decoded.casefold() == candidate.original.casefold():
        return RejectReason.IDENTICAL
    return None


def check_still_encoded(candidate: DecodedCandidate) -> Optional[RejectReason]:
    if is_likely_percent_encoded(candidate.normalized) or is_likely_percent_encoded(candidate.decoded):
        return RejectReason.STILL_ENCODED
    return None


def check_error_markers(candidate: DecodedCandidate) -> Optional[RejectReason]:
    upper = candidate.decoded.upper()
    if upper == ERROR_EXACT or any(marker in upper for marker in ERROR_MARKERS):
        return RejectReason.PROVIDER_ERROR
    return None


def check_script_mix(candidate: DecodedCandidate) -> Optional[RejectReason]:
    """
    Reject Sinhala output where Latin letters are at least as common.

    Latin-script targets are handled asymmetrically: a single Latin word is
    enough to pass, and Sinhala output without any is rejected so the
    cascade keeps going.
    """
    decoded = candidate.decoded

    if lc.is_latin_script_target(candidate.target_language):
        if has_latin_word(decoded):
            return None
        if contains_sinhala(decoded):
            return RejectReason.SCRIPT_MISMATCH
        return None

    if contains_latin(decoded) and contains_sinhala(decoded):
        if count_latin(decoded) >= count_sinhala(decoded):
            return RejectReason.SCRIPT_MISMATCH
    return None


Check = Callable[[DecodedCandidate], Optional[RejectReason]]

VALIDATION_STEPS: Tuple[Check, ...] = (
    check_identity,
    check_still_encoded,
    check_error_markers,
    check_script_mix,
)


def validate_candidate(original: str, raw: Optional[str], target_language: str) -> ValidationVerdict:
    """
    Decode a raw provider result and decide whether it is usable.

    Args:
        original: The text that was sent for translation
        raw: The provider's answer (None or blank counts as a provider error)
        target_language: Requested target language code

    Returns:
        ValidationVerdict with the decoded, trimmed text or a rejection reason
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return ValidationVerdict.reject(RejectReason.PROVIDER_ERROR)

    candidate = decode_candidate(original, trimmed, target_language)
    for check in VALIDATION_STEPS:
        reason = check(candidate)
        if reason is not None:
            logger.debug(f"Rejected candidate {trimmed[:60]!r} ({check.__name__}: {reason.value})")
            return ValidationVerdict.reject(reason)

    return ValidationVerdict.accept(candidate.decoded.strip())


def pick_valid_translation(original: str, raw: Optional[str], target_language: str) -> Optional[str]:
    """Shorthand for validate_candidate that returns the text or None."""
    verdict = validate_candidate(original, raw, target_language)
    return verdict.text if verdict.accepted else None
