import copy
import json
from typing import Dict, Any

from traveltalk.core import database as db
from traveltalk.core.schema import initialize_database
from traveltalk.language_codes import LIBRETRANSLATE_LANGUAGES
from traveltalk.logger import get_logger

logger = get_logger(__name__)

# Translation configuration constants
DEFAULT_TIMEOUT = 10  # Seconds, applied to every provider request
LONG_TEXT_THRESHOLD = 200  # Characters; longer input prefers the POST provider
DEFAULT_USER_AGENT = "TravelTalk/1.0 (Python)"

LOG_MODES = ("off", "info", "debug")

# Default configuration template
DEFAULT_CONFIG = {
    "mymemory": {
        "api_url": "https://api.mymemory.translated.net/get",
        "timeout": DEFAULT_TIMEOUT,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "libretranslate": {
        "api_url": "https://libretranslate.com/translate",
        "mirror_url": "https://libretranslate.de/translate",
        "timeout": DEFAULT_TIMEOUT,
        "supported_languages": sorted(LIBRETRANSLATE_LANGUAGES),
    },
    "translation": {
        "long_text_threshold": LONG_TEXT_THRESHOLD,
        "retry_pause": 0.3,  # Before the last MyMemory retry on the short path
        "variant_retry_pause": 0.2,  # Before the final auto-detect variant
        "segment_pause": 0.12,  # After each chunked segment
        "word_pause": 0.1,  # After each word-by-word request
    },
    "log_mode": "off"
}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of base with overrides applied one level deep."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def initialize_app():
    """
    Initialize the application.
    This function is called on first run or when performing a factory reset.
    It creates the database and default configuration in database.
    """
    logger.info("Initializing application...")

    initialize_database()
    logger.info("Database initialized")

    try:
        existing_config = db.get_app_config('config')
        if not existing_config:
            logger.info("No config in database, initializing default config")
            save_config(DEFAULT_CONFIG)
        else:
            logger.debug("Config already exists in database")
    except Exception as e:
        logger.error(f"Failed to check/initialize config in database: {e}")
        logger.warning("Application will use in-memory default configuration")

    logger.info("Application initialization complete")


def load_config() -> Dict[str, Any]:
    """Load the configuration from database, filling gaps from the defaults."""
    if not db.DB_FILE.exists():
        logger.debug("No database yet, using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        config_json = db.get_app_config('config')
    except Exception as e:
        logger.error(f"Failed to load config from database: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not config_json:
        logger.debug("No config in database, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        stored = json.loads(config_json)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config from database: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Configuration loaded from database")
    return merge_config(DEFAULT_CONFIG, stored)


def save_config(config: Dict[str, Any]):
    """Save the configuration to database."""
    try:
        config_json = json.dumps(config, ensure_ascii=False)
        db.set_app_config('config', config_json)
        logger.info("Configuration saved to database")
    except Exception as e:
        logger.error(f"Failed to save config to database: {e}")
        raise


def factory_reset():
    """
    Perform a factory reset.
    WARNING: This will delete all saved phrases and reset settings to defaults.
    """
    logger.warning("Performing factory reset...")

    if db.DB_FILE.exists():
        db.DB_FILE.unlink()
        logger.info("Database deleted")

    initialize_app()
    logger.info("Factory reset complete")
