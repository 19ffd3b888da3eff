"""Settings management API routes."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, jsonify, request

import traveltalk.config as config
import traveltalk.language_codes as lc
from traveltalk.logger import get_logger, _clear_log_mode_cache
from traveltalk.web.responses import error_response, message

settings_bp = Blueprint("settings", __name__)
logger = get_logger(__name__)

PROVIDER_SECTIONS = ("mymemory", "libretranslate")
PAUSE_KEYS = ("retry_pause", "variant_retry_pause", "segment_pause", "word_pause")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(new_config: Dict[str, Any]) -> Optional[str]:
    """Return a reason string if the configuration is invalid, else None."""
    if not isinstance(new_config, dict):
        return "config must be an object"

    if "log_mode" in new_config and new_config["log_mode"] not in config.LOG_MODES:
        return f"log_mode must be one of {', '.join(config.LOG_MODES)}"

    for provider in PROVIDER_SECTIONS:
        if provider not in new_config:
            continue
        provider_config = new_config[provider]
        if not isinstance(provider_config, dict):
            return f"{provider} config must be an object"

        for url_key in ("api_url", "mirror_url"):
            if url_key in provider_config:
                url = provider_config[url_key]
                if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                    return f"{provider} {url_key} must be an http(s) URL"

        if "timeout" in provider_config:
            timeout = provider_config["timeout"]
            if not _is_number(timeout) or timeout <= 0:
                return f"{provider} timeout must be a positive number"

        if "supported_languages" in provider_config:
            languages = provider_config["supported_languages"]
            if not isinstance(languages, list) or not all(isinstance(c, str) and c for c in languages):
                return f"{provider} supported_languages must be a list of language codes"

    translation = new_config.get("translation")
    if translation is not None:
        if not isinstance(translation, dict):
            return "translation config must be an object"
        threshold = translation.get("long_text_threshold")
        if threshold is not None and (not isinstance(threshold, int) or isinstance(threshold, bool) or threshold < 1):
            return "long_text_threshold must be a positive integer"
        for key in PAUSE_KEYS:
            if key in translation and (not _is_number(translation[key]) or translation[key] < 0):
                return f"{key} must be a non-negative number"

    return None


@settings_bp.get("/")
def get_settings():
    """Return current configuration with default values merged."""
    try:
        current_config = config.load_config()
    except Exception as e:
        logger.error(f"Failed to retrieve settings: {e}")
        return error_response("api.errors.failed_to_retrieve_settings", 500)

    return jsonify({
        "config": current_config,
        "meta": {
            "log_modes": list(config.LOG_MODES),
            "languages": lc.get_all_language_codes(),
        },
    })


@settings_bp.put("/")
def update_settings():
    """Update configuration, merging the request over the stored values."""
    data = request.get_json(silent=True)
    if not data or "config" not in data:
        return error_response("api.errors.config_missing", 400)

    new_config = data["config"]
    reason = validate_config(new_config)
    if reason:
        return error_response("api.errors.invalid_config", 400, reason=reason)

    merged = config.merge_config(config.load_config(), new_config)
    try:
        config.save_config(merged)
    except Exception as e:
        logger.error(f"Failed to save settings: {e}")
        return error_response("api.errors.failed_to_save_settings", 500)

    if "log_mode" in new_config:
        _clear_log_mode_cache()

    logger.info("Settings updated")
    return jsonify({
        "config": merged,
        "message": message("api.messages.settings_saved"),
    })
