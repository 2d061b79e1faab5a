"""API Gateway proxy request parsing and response helpers.

Supports both REST API (v1) and HTTP API (v2) proxy event shapes.
"""

import base64
import binascii
import json
import logging
from typing import Any

from core.errors import ErrorCode, StudioError, USER_MESSAGES, ValidationError

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, stripe-signature",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def get_method(event: dict[str, Any]) -> str:
    method = event.get("httpMethod") or (event.get("requestContext") or {}).get("http", {}).get("method") or ""
    return method.upper()


def is_preflight(event: dict[str, Any]) -> bool:
    return get_method(event) == "OPTIONS"


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup; API Gateway preserves client casing."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_raw_body(event: dict[str, Any]) -> bytes:
    """Return the request body exactly as the client sent it."""
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except binascii.Error as e:
            raise ValidationError(f"Request body is not valid base64: {e}", code=ErrorCode.INVALID_REQUEST) from e
    return body.encode("utf-8")


def parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    raw = get_raw_body(event)
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(f"Request body is not valid JSON: {e}", code=ErrorCode.INVALID_REQUEST) from e
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", code=ErrorCode.INVALID_REQUEST)
    return payload


def json_response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def preflight_response() -> dict[str, Any]:
    return {"statusCode": 200, "headers": dict(CORS_HEADERS), "body": ""}


def error_response(error: Exception, status: int | None = None) -> dict[str, Any]:
    """Convert an exception into a JSON error body without leaking internals."""
    if isinstance(error, StudioError):
        return json_response(
            status or error.status_code,
            {"error": error.user_message, "code": error.code.value},
        )
    return json_response(
        status or 500,
        {"error": USER_MESSAGES[ErrorCode.INTERNAL_ERROR], "code": ErrorCode.INTERNAL_ERROR.value},
    )


def require_field(body: dict[str, Any], name: str, label: str | None = None) -> str:
    """Return a non-blank string field or raise ValidationError."""
    value = body.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label or name} is required")
    return value
