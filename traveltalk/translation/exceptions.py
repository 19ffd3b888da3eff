"""
Translation Exceptions

This module contains exception classes for the translation pipeline.
Separated to avoid circular imports between the resolver and providers.
"""


class TranslationError(Exception):
    """Translation service error with optional code and details."""

    code_default = "translation_error"

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code or self.code_default
        self.details = details or {}


class EmptyInputError(TranslationError):
    """The caller asked to translate blank text."""

    code_default = "empty_input"


class ProviderError(TranslationError):
    """A single provider attempt failed; the cascade moves on."""

    code_default = "provider_error"

    def __init__(self, message: str, provider=None, code: str = None, details: dict = None):
        super().__init__(message, code=code, details=details)
        self.provider = provider


class ProviderUnreachableError(ProviderError):
    """Transport-level failure: connection error, timeout, HTTP error status."""

    code_default = "provider_unreachable"


class ProviderRejectedError(ProviderError):
    """The provider answered but nothing usable came back."""

    code_default = "provider_rejected"

    def __init__(self, message: str, provider=None, reason=None, code: str = None, details: dict = None):
        super().__init__(message, provider=provider, code=code, details=details)
        self.reason = reason


class ResolutionExhaustedError(TranslationError):
    """Every stage of the cascade failed."""

    code_default = "resolution_exhausted"
