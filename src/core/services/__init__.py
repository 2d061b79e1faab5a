"""
Business services for Studio Functions.

- webhook.py: Stripe signature verification and booking confirmation
- eligibility.py: Introductory Offer eligibility
- tokens.py: usable session token summary
- payment_verification.py: manual re-check of a booking against Stripe
"""

__all__: list[str] = []
