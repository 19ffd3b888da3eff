"""JSON response helpers that localize messages for the current request."""

from typing import Any, Optional

from flask import g, jsonify

from traveltalk import messages


def message(key: str, **params) -> str:
    """Catalog message in the UI language chosen for this request."""
    return messages.get_message(key, lang=g.get("lang", messages.DEFAULT_UI_LANGUAGE), **params)


def error_response(key: str, status: int, code: Optional[str] = None, **extra: Any):
    """
    Build an (response, status) error tuple.

    Keyword arguments fill the message placeholders; "details" is passed
    through to the body instead.
    """
    details = extra.pop("details", None)
    body = {"error": message(key, **extra)}
    if code:
        body["code"] = code
    if details is not None:
        body["details"] = details
    return jsonify(body), status
