"""
Language code mappings and utilities.

Standards:
- ISO 639-1: 2-letter language codes (en, si, ta)
- BCP 47: Language + Region codes (si-LK, en-US)

The translator works with plain two-letter codes. A handful of providers
answer better to a region-qualified code, so each base code may declare one
locale variant (e.g. 'si' -> 'si-LK') that the provider cascades try as an
alternative.
"""

from typing import Iterable, Optional, Dict

# ISO 639-1 language codes (2-letter)
ISO_639_1 = {
    'ar': 'Arabic',
    'az': 'Azerbaijani',
    'cs': 'Czech',
    'de': 'German',
    'en': 'English',
    'es': 'Spanish',
    'fr': 'French',
    'hi': 'Hindi',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'nl': 'Dutch',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ru': 'Russian',
    'si': 'Sinhala',
    'ta': 'Tamil',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
}

# BCP 47 language-region codes (common variants)
BCP_47_VARIANTS = {
    'en-US': 'English (United States)',
    'en-GB': 'English (United Kingdom)',
    'si-LK': 'Sinhala (Sri Lanka)',
    'ta-LK': 'Tamil (Sri Lanka)',
}

# Combined mapping
ALL_LANGUAGE_CODES = {**ISO_639_1, **BCP_47_VARIANTS}

# Region-qualified alternative tried by the MyMemory variant cascade
LOCALE_VARIANTS = {
    'si': 'si-LK',
}

# Pseudo source code asking the provider to detect the language
AUTO_DETECT = 'auto'

# Target languages LibreTranslate accepts
LIBRETRANSLATE_LANGUAGES = frozenset({
    'en', 'ar', 'az', 'zh', 'cs', 'nl', 'fr', 'de', 'hi', 'it',
    'ja', 'ko', 'pl', 'pt', 'ru', 'es', 'tr', 'uk', 'vi',
})

# Targets for which the validator accepts any Latin word outright
LATIN_SCRIPT_TARGETS = frozenset({'en'})


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Examples:
        >>> extract_base_language('si-LK')
        'si'
        >>> extract_base_language('en')
        'en'
    """
    return code.split('-')[0]


def locale_variant(code: str) -> str:
    """
    Return the region-qualified variant of a code, or the code itself.

    Examples:
        >>> locale_variant('si')
        'si-LK'
        >>> locale_variant('en')
        'en'
    """
    return LOCALE_VARIANTS.get(code, code)


def normalize_language(value: str) -> Optional[str]:
    """
    Turn user input into a language code.

    Accepts codes in any case ('SI', 'si_lk') and English display names
    ('Sinhala'). Returns None for anything unrecognised.

    Examples:
        >>> normalize_language('Sinhala')
        'si'
        >>> normalize_language('si_lk')
        'si-LK'
        >>> normalize_language('Klingon') is None
        True
    """
    if not value or not value.strip():
        return None

    candidate = value.strip().replace('_', '-')
    lowered = candidate.lower()

    for code in ALL_LANGUAGE_CODES:
        if code.lower() == lowered:
            return code

    for code, name in ISO_639_1.items():
        if name.lower() == lowered:
            return code

    return None


def libre_supports(code: str, supported: Optional[Iterable[str]] = None) -> bool:
    """Check whether LibreTranslate accepts the given target code."""
    allowed = set(supported) if supported is not None else LIBRETRANSLATE_LANGUAGES
    return code in allowed


def is_latin_script_target(code: str) -> bool:
    return extract_base_language(code) in LATIN_SCRIPT_TARGETS


def get_all_language_codes() -> Dict[str, str]:
    """
    Get all supported language codes.

    Returns:
        Dict mapping code to language name
    """
    return ALL_LANGUAGE_CODES.copy()
