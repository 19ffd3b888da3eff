"""Web application package for TravelTalk."""

from flask import Flask

from traveltalk.config import initialize_app


def create_app(resolver_factory=None) -> Flask:
    """Application factory for the web API."""
    initialize_app()

    from .app import build_app  # Import here to avoid circular imports

    return build_app(resolver_factory=resolver_factory)


__all__ = ["create_app"]
