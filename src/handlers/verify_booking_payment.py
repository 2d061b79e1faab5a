"""Staff-triggered payment re-check for a pending booking."""

import logging
from typing import Any

from core.clients import get_store
from core.config import configure_logging, get_config
from core.errors import NotFoundError, StudioError, ValidationError
from core.http import error_response, is_preflight, json_response, parse_json_body, preflight_response, require_field
from core.services.payment_verification import verify_booking_payment

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if is_preflight(event):
        return preflight_response()

    try:
        config = get_config()
        configure_logging(config)
        body = parse_json_body(event)
        result = verify_booking_payment(
            require_field(body, "bookingId", "Booking ID"),
            get_store(),
            config.stripe_secret_key,
            logger=logger,
        )
        return json_response(200, result.to_response())
    except (ValidationError, NotFoundError) as e:
        logger.warning("Payment verification rejected [%s]: %s", e.code.value, e.message)
        return error_response(e)
    except StudioError as e:
        logger.exception("Error verifying booking payment [%s]: %s", e.code.value, e.message)
        return error_response(e, status=500)
    except Exception as e:
        logger.exception("Error verifying booking payment")
        return error_response(e, status=500)
