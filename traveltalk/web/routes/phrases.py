"""Saved phrases API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from traveltalk.core.phrases import SavedPhrasesStore
from traveltalk.logger import get_logger
from traveltalk.web.responses import error_response, message

phrases_bp = Blueprint("phrases", __name__)
logger = get_logger(__name__)


@phrases_bp.get("/")
def list_phrases():
    store = SavedPhrasesStore()
    return jsonify({"phrases": [p.to_dict() for p in store.phrases]})


@phrases_bp.post("/")
def save_phrase():
    data: Dict[str, Any] = request.get_json(silent=True) or {}

    store = SavedPhrasesStore()
    phrase = store.add(
        source_lang=str(data.get("source_lang", "")),
        target_lang=str(data.get("target_lang", "")),
        input=str(data.get("input") or ""),
        output=str(data.get("output") or ""),
    )
    if phrase is None:
        return error_response("api.errors.nothing_to_save", 400)

    logger.info("Saved phrase %s", phrase.id)
    return jsonify({"phrase": phrase.to_dict(), "message": message("api.messages.phrase_saved")}), 201


@phrases_bp.delete("/<phrase_id>")
def delete_phrase(phrase_id: str):
    if not SavedPhrasesStore().remove(phrase_id):
        return error_response("api.errors.phrase_not_found", 404)
    return jsonify({"message": message("api.messages.phrase_deleted")})
