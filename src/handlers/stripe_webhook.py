"""Stripe webhook that confirms paid bookings.

Every failure answers 400 so Stripe redelivers; nothing is retried here.
"""

import logging
from typing import Any

from core.clients import get_store
from core.config import configure_logging, get_config
from core.errors import AuthenticationError, StudioError
from core.http import error_response, get_header, get_raw_body, is_preflight, json_response, preflight_response
from core.services.webhook import process_event, verify_event

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if is_preflight(event):
        return preflight_response()

    try:
        config = get_config()
        configure_logging(config)

        stripe_event = verify_event(
            get_raw_body(event),
            get_header(event, "stripe-signature"),
            config.stripe_webhook_secret,
        )
        process_event(stripe_event, get_store(), logger=logger)
        return json_response(200, {"received": True})
    except AuthenticationError as e:
        # Possible tampering, or the endpoint secret does not match the Stripe dashboard.
        logger.warning("Rejected webhook: %s", e.message)
        return error_response(e, status=400)
    except StudioError as e:
        logger.exception("Webhook error [%s]: %s", e.code.value, e.message)
        return error_response(e, status=400)
    except Exception as e:
        logger.exception("Webhook error")
        return error_response(e, status=400)
