"""
User-facing API messages in English and Sinhala.

Catalogs live in web/locales/<code>.json as nested objects addressed with
dot notation ('api.errors.empty_input'). A key missing from the Sinhala
catalog falls back to English, and a key missing everywhere comes back
unchanged.

Note: Log messages are NOT localized - they remain in English for debugging purposes.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from traveltalk.logger import get_logger

logger = get_logger(__name__)

CATALOG_DIR = Path(__file__).parent / "web" / "locales"

DEFAULT_UI_LANGUAGE = "en"

UI_LANGUAGES = {
    "en": "English",
    "si": "සිංහල",
}

_catalogs: Dict[str, Dict[str, Any]] = {}


def match_ui_language(code: Optional[str]) -> Optional[str]:
    """
    Return the catalog matching code by its base language, or None.

    Examples:
        >>> match_ui_language('si_LK')
        'si'
        >>> match_ui_language('fr') is None
        True
    """
    if not code or not code.strip():
        return None
    base = code.strip().lower().replace('_', '-').split('-')[0]
    return base if base in UI_LANGUAGES else None


def ui_language(code: Optional[str]) -> str:
    """
    Map a requested language onto one of the catalogs, defaulting to English.

    Examples:
        >>> ui_language('si-LK')
        'si'
        >>> ui_language('fr')
        'en'
    """
    return match_ui_language(code) or DEFAULT_UI_LANGUAGE


def load_catalog(code: str) -> Dict[str, Any]:
    """Load (and cache) the message catalog for a UI language."""
    code = ui_language(code)
    if code in _catalogs:
        return _catalogs[code]

    path = CATALOG_DIR / f"{code}.json"
    try:
        with open(path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load message catalog {path}: {e}")
        catalog = {}

    _catalogs[code] = catalog
    return catalog


def _lookup(catalog: Dict[str, Any], key: str) -> Optional[str]:
    node: Any = catalog
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def get_message(key: str, lang: str = DEFAULT_UI_LANGUAGE, **params) -> str:
    """
    Return the message for key in the given UI language.

    Args:
        key: Dot-separated catalog key
        lang: Requested UI language
        **params: Values substituted into {placeholders}

    Returns:
        The formatted message, the English one if lang lacks it, or key itself
    """
    lang = ui_language(lang)
    message = _lookup(load_catalog(lang), key)
    if message is None and lang != DEFAULT_UI_LANGUAGE:
        message = _lookup(load_catalog(DEFAULT_UI_LANGUAGE), key)

    if message is None:
        logger.debug(f"No message for key {key} (lang: {lang})")
        return key

    if params:
        try:
            message = message.format(**params)
        except KeyError as e:
            logger.warning(f"Missing placeholder {e} for message: {key}")
    return message


def clear_cache() -> None:
    _catalogs.clear()
