"""Response helpers shared by the feature controllers.

Views answer with JSON view models; forms may be posted either as
``application/x-www-form-urlencoded`` or as JSON.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import flash, get_flashed_messages, jsonify, redirect, request, url_for

from ..core.constants import MSG_LOAD_FAILED
from ..core.exceptions import ApiError, AuthorizationError, DomainError, ValidationError
from .result import FetchResult

logger = logging.getLogger(__name__)


def wants_json() -> bool:
    if request.is_json:
        return True
    accept = request.accept_mimetypes
    return accept.accept_json and not accept.accept_html


def form_data() -> dict:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def arg_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.args.get(name, "")
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def arg_bool(name: str, default: bool = False) -> bool:
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def view_model(view: str, **data: Any):
    return jsonify(
        {
            "view": view,
            "messages": [
                {"category": c, "message": m} for c, m in get_flashed_messages(with_categories=True)
            ],
            **data,
        }
    )


def load_failed(reason: FetchResult | DomainError | None = None, *, retry_url: Optional[str] = None):
    """Inline error state for a failed load, with a retry link to the same view."""

    message = MSG_LOAD_FAILED
    if isinstance(reason, FetchResult) and reason.error is not None:
        logger.error("Load failed for %s: %s", request.path, reason.error.message)
    elif reason is not None:
        logger.error("Load failed for %s: %s", request.path, reason)
    return (
        jsonify(
            {
                "items": [],
                "error": {"message": message, "retry_url": retry_url or request.full_path.rstrip("?")},
            }
        ),
        502,
    )


def mutation_error_message(error: DomainError, fallback: str) -> str:
    if isinstance(error, ApiError):
        return error.user_message(fallback)
    return str(error) or fallback


def mutation_failed(error: DomainError, *, fallback: str, endpoint: str, **values: Any):
    message = mutation_error_message(error, fallback)
    if wants_json():
        status = 400
        if isinstance(error, AuthorizationError):
            status = 403
        elif isinstance(error, ApiError):
            status = error.status if error.status and error.status >= 400 else 502
        return jsonify({"success": False, "message": message}), status
    flash(message, "danger")
    return redirect(url_for(endpoint, **values))


def mutation_succeeded(message: str, *, endpoint: str, data: Any = None, **values: Any):
    if wants_json():
        return jsonify({"success": True, "message": message, "data": data})
    flash(message, "success")
    return redirect(url_for(endpoint, **values))


HANDLED_ERRORS = (ValidationError, AuthorizationError, ApiError)


def not_found(message: str):
    return jsonify({"error": {"message": message}}), 404
