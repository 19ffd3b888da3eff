"""Translation API routes."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request

import traveltalk.language_codes as lc
from traveltalk.logger import get_logger
from traveltalk.translation.exceptions import EmptyInputError, ResolutionExhaustedError
from traveltalk.web.responses import error_response, message
from traveltalk.web.tasks import create_translation_job, discard_job, get_job

translation_bp = Blueprint("translation", __name__)
logger = get_logger(__name__)

DEFAULT_SOURCE = "en"
DEFAULT_TARGET = "si"


def _resolver_factory():
    return current_app.config["RESOLVER_FACTORY"]


def _parse_translation_request(data: Dict[str, Any]) -> Tuple[Optional[tuple], Optional[tuple]]:
    """
    Validate a translation payload.

    Returns:
        ((text, source, target), None) on success, or (None, (response, status)) on error
    """
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return None, error_response("api.errors.empty_input", 400, code=EmptyInputError.code_default)

    codes = []
    for field_name, default in (("source", DEFAULT_SOURCE), ("target", DEFAULT_TARGET)):
        raw = data.get(field_name, default)
        code = lc.normalize_language(raw) if isinstance(raw, str) else None
        if not code:
            return None, error_response("api.errors.invalid_language", 400, code="invalid_language", language=raw)
        codes.append(code)

    return (text.strip(), codes[0], codes[1]), None


@translation_bp.post("/translate")
def translate():
    """Translate synchronously and return the accepted text."""
    parsed, failure = _parse_translation_request(request.get_json(silent=True) or {})
    if failure:
        return failure
    text, source, target = parsed

    resolver = _resolver_factory()()
    try:
        result = resolver.resolve_result(text, source, target)
    except EmptyInputError as e:
        return error_response("api.errors.empty_input", 400, code=e.code)
    except ResolutionExhaustedError as e:
        logger.warning("Translation exhausted for %s -> %s", source, target)
        return error_response("api.errors.resolution_exhausted", 502, code=e.code, details=e.details)

    return jsonify({**result.to_dict(), "source": source, "target": target})


@translation_bp.post("/translations")
def start_translation_job():
    """Start a background translation job; poll it with GET."""
    parsed, failure = _parse_translation_request(request.get_json(silent=True) or {})
    if failure:
        return failure
    text, source, target = parsed

    job = create_translation_job(text, source, target, _resolver_factory())
    return jsonify({"job_id": job.job_id, "job": job.to_dict()}), 202


@translation_bp.get("/translations/<job_id>")
def get_translation_job(job_id: str):
    job = get_job(job_id)
    if not job:
        return error_response("api.errors.job_not_found", 404)

    payload = job.to_dict()
    if job.state == "failed" and job.error_code == ResolutionExhaustedError.code_default:
        payload["error"] = message("api.errors.resolution_exhausted")
    return jsonify({"job": payload})


@translation_bp.delete("/translations/<job_id>")
def delete_translation_job(job_id: str):
    if not discard_job(job_id):
        return error_response("api.errors.job_not_found", 404)
    return jsonify({"message": message("api.messages.job_discarded")})


@translation_bp.get("/languages")
def list_languages():
    return jsonify({
        "languages": [
            {"code": code, "name": name}
            for code, name in lc.get_all_language_codes().items()
        ]
    })
