"""Introductory Offer eligibility check."""

import logging
from typing import Any

from core.clients import get_store
from core.config import configure_logging, get_config
from core.errors import StudioError, ValidationError
from core.http import error_response, is_preflight, json_response, parse_json_body, preflight_response, require_field
from core.services.eligibility import check_intro_eligibility

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if is_preflight(event):
        return preflight_response()

    try:
        configure_logging(get_config())
        body = parse_json_body(event)
        email = require_field(body, "email", "Email")
        result = check_intro_eligibility(email, get_store(), logger=logger)
        return json_response(200, result.model_dump(mode="json", by_alias=True))
    except ValidationError as e:
        logger.warning("Invalid eligibility request: %s", e.message)
        return error_response(e)
    except StudioError as e:
        logger.exception("Error checking intro eligibility [%s]: %s", e.code.value, e.message)
        return error_response(e, status=500)
    except Exception as e:
        logger.exception("Error checking intro eligibility")
        return error_response(e, status=500)
