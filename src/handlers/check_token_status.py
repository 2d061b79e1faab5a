"""Session token balance for a customer email."""

import logging
from typing import Any

from core.clients import get_store
from core.config import configure_logging, get_config
from core.errors import StudioError, ValidationError
from core.http import error_response, is_preflight, json_response, parse_json_body, preflight_response, require_field
from core.services.tokens import get_token_status

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if is_preflight(event):
        return preflight_response()

    try:
        configure_logging(get_config())
        body = parse_json_body(event)
        email = require_field(body, "email", "Email")
        status = get_token_status(email, get_store(), logger=logger)
        return json_response(200, status.to_response())
    except ValidationError as e:
        logger.warning("Invalid token status request: %s", e.message)
        return error_response(e)
    except StudioError as e:
        logger.exception("Error checking token status [%s]: %s", e.code.value, e.message)
        return error_response(e, status=500)
    except Exception as e:
        logger.exception("Error checking token status")
        return error_response(e, status=500)
