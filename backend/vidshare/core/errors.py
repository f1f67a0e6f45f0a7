"""Centralized JSON error handling for the API.

Every failure leaves the application as the same envelope::

    {"statusCode": 404, "message": "Video not found", "success": false, "errors": []}

Internal details (tracebacks, SQL, library messages) never reach clients;
they are logged together with the request correlation id instead.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidshare.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def _as_envelope(
    *,
    status: int,
    message: str,
    errors: list[Any] | None = None,
) -> dict[str, Any]:
    """
    Build the error envelope dict.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional list of safe, structured details.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    return {
        "statusCode": int(status),
        "message": message,
        "success": False,
        "errors": list(errors or []),
    }


def _envelope_response(envelope: dict[str, Any]) -> Response:
    """
    Return a Flask JSON response carrying the error envelope.

    :param envelope: Error envelope payload.
    :returns: Flask JSON Response.
    :rtype: flask.Response
    """
    resp = jsonify(envelope)
    resp.status_code = envelope["statusCode"]
    return resp


def flatten_messages(messages: Any, prefix: str = "") -> list[dict[str, Any]]:
    """Turn marshmallow's nested ``messages`` mapping into a flat error list.

    ``{"email": ["Not a valid email address."]}`` becomes
    ``[{"field": "email", "messages": ["Not a valid email address."]}]``.
    """
    if isinstance(messages, dict):
        flat: list[dict[str, Any]] = []
        for key, value in messages.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, dict):
                flat.extend(flatten_messages(value, path))
            else:
                items = value if isinstance(value, list) else [value]
                flat.append({"field": path, "messages": [str(item) for item in items]})
        return flat
    items = messages if isinstance(messages, list) else [messages]
    return [{"field": prefix or "_schema", "messages": [str(item) for item in items]}]


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list[Any] | None, optional
        Optional structured payload (e.g., validation messages) included in the
        ``errors`` list of the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = errors or []

    def to_envelope(self) -> dict[str, Any]:
        """
        Serialize error metadata into the error envelope.

        :returns: Envelope dictionary.
        :rtype: dict
        """
        return _as_envelope(status=self.status_code, message=self.message, errors=self.errors)


# Domain conveniences
class ValidationError(APIError):
    """400 when input is missing or malformed."""

    def __init__(self, message: str = "Invalid request", errors: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, errors=errors)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when the caller does not own the resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class UpstreamFailure(APIError):
    """500 when the media host or a store write fails."""

    def __init__(self, message: str = "Upstream service failed") -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def _log_api_error(err: APIError) -> None:
    # 4xx -> warning; 5xx -> error
    level = log.error if err.status_code >= 500 else log.warning
    level(
        "APIError: status=%s msg=%s request_id=%s",
        err.status_code,
        err.message,
        ensure_request_id(),
    )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the error envelope for all handled errors.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log_api_error(err)
        return _envelope_response(err.to_envelope())

    from vidshare.services._shared.base import BaseService
    from vidshare.services._shared.errors import ServiceError

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if not isinstance(translated, APIError):  # pragma: no cover - mapping is total
            translated = APIError(str(err))
        _log_api_error(translated)
        return _envelope_response(translated.to_envelope())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: status=%s detail=%s request_id=%s",
            status,
            message,
            ensure_request_id(),
        )
        return _envelope_response(_as_envelope(status=status, message=message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        envelope = _as_envelope(
            status=HTTPStatus.BAD_REQUEST,
            message="Validation failed",
            errors=flatten_messages(err.messages),
        )
        log.warning("ValidationError: request_id=%s", ensure_request_id())
        return _envelope_response(envelope)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=True)
        return _envelope_response(
            _as_envelope(status=HTTPStatus.CONFLICT, message="Resource conflict")
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=True)
        return _envelope_response(
            _as_envelope(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                message="Service temporarily unavailable",
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return _envelope_response(
            _as_envelope(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Something went wrong",
            )
        )
