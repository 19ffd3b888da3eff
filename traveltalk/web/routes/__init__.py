"""Route blueprints for the web application."""

from .translation import translation_bp
from .phrases import phrases_bp
from .settings import settings_bp

__all__ = [
    "translation_bp",
    "phrases_bp",
    "settings_bp",
]
