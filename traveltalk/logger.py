import logging
import os
from pathlib import Path

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Cache for log mode to avoid repeated config reads
_log_mode_cache = None


def _get_log_mode():
    """Get log mode from the environment or configuration."""
    global _log_mode_cache
    if _log_mode_cache is not None:
        return _log_mode_cache

    env_mode = os.environ.get('TRAVELTALK_LOG_MODE')
    if env_mode:
        _log_mode_cache = env_mode
        return env_mode

    try:
        from traveltalk.core import database as db
        if not db.DB_FILE.exists():
            return 'off'
        from traveltalk.config import load_config
        log_mode = load_config().get('log_mode', 'off')
        _log_mode_cache = log_mode
        return log_mode
    except Exception:
        # If config loading fails, default to 'off'
        return 'off'


def _levels_for(log_mode):
    if log_mode == 'debug':
        return logging.DEBUG, logging.DEBUG
    if log_mode == 'off':
        # Higher than CRITICAL disables everything
        return logging.CRITICAL + 1, logging.CRITICAL + 1
    return logging.INFO, logging.INFO


def _new_file_handler():
    LOG_DIR.mkdir(exist_ok=True)
    f_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    f_handler.setLevel(logging.DEBUG)
    f_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return f_handler


def _apply_log_mode(logger, log_mode):
    logger_level, console_level = _levels_for(log_mode)
    logger.setLevel(logger_level)

    has_file_handler = any(isinstance(h, logging.FileHandler) for h in logger.handlers)

    if log_mode != 'off' and not has_file_handler:
        logger.addHandler(_new_file_handler())
    elif log_mode == 'off' and has_file_handler:
        for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
            handler.close()
            logger.removeHandler(handler)

    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(console_level)


def _clear_log_mode_cache():
    """Clear the log mode cache and update all existing loggers (call this when config is updated)."""
    global _log_mode_cache
    _log_mode_cache = None

    log_mode = _get_log_mode()

    # Only update loggers that have handlers (i.e., were created by get_logger)
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        if logger.handlers:
            _apply_log_mode(logger, log_mode)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    log_mode = _get_log_mode()

    # Prevent duplicate handlers if logger already configured
    if logger.handlers:
        _apply_log_mode(logger, log_mode)
        return logger

    c_handler = logging.StreamHandler()
    c_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(c_handler)
    _apply_log_mode(logger, log_mode)

    return logger
