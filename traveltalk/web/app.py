"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Callable, Optional

from flask import Flask, jsonify, request, g

from traveltalk import messages
from traveltalk.logger import get_logger
from traveltalk.translation.resolver import TranslationResolver

from .responses import error_response
from .routes import phrases_bp, settings_bp, translation_bp

logger = get_logger(__name__)


def choose_ui_language() -> str:
    """
    Pick the language for API messages.
    Priority: ?lang= > lang cookie > Accept-Language header > English
    """
    for requested in (request.args.get('lang'), request.cookies.get('lang')):
        matched = messages.match_ui_language(requested)
        if matched:
            return matched

    best = request.accept_languages.best_match(list(messages.UI_LANGUAGES))
    return messages.ui_language(best)


def build_app(resolver_factory: Optional[Callable[[], TranslationResolver]] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        resolver_factory: Builds the resolver for each translation; defaults
            to a TranslationResolver reading the stored configuration
    """
    app = Flask(__name__)

    # Sinhala output must not be escaped to \\uXXXX sequences
    app.json.ensure_ascii = False
    app.config["RESOLVER_FACTORY"] = resolver_factory or TranslationResolver

    @app.before_request
    def before_request():
        g.lang = choose_ui_language()

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    app.register_blueprint(translation_bp, url_prefix="/api")
    app.register_blueprint(phrases_bp, url_prefix="/api/phrases")
    app.register_blueprint(settings_bp, url_prefix="/api/settings")


def register_default_routes(app: Flask) -> None:
    """Register health route and JSON error handlers."""

    @app.get("/health")
    def health_check():
        return jsonify({"status": "ok"})

    @app.errorhandler(404)
    def page_not_found(e):
        return error_response("errors.page_not_found", 404)

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return error_response("errors.unexpected_error_occurred", 500)
