"""
WhatsApp Webhook Verification

Subscription handshake for the per-store webhook.
No retries. No I/O.
"""

import hmac
from typing import Optional

SUBSCRIBE_MODE = "subscribe"


def verify_webhook_challenge(
    hub_mode: Optional[str],
    hub_verify_token: Optional[str],
    expected_token: Optional[str],
) -> bool:
    """
    Verify webhook subscription challenge from WhatsApp.

    WhatsApp calls GET /webhook with:
    - hub.mode=subscribe
    - hub.challenge=random_string
    - hub.verify_token=configured_token

    The caller echoes hub.challenge back when this returns True.

    Args:
        hub_mode: Should be "subscribe"
        hub_verify_token: Token sent by WhatsApp
        expected_token: The store's configured webhook secret

    Returns:
        True iff the mode is "subscribe" and the token matches.
        A store without a configured secret never verifies.
    """
    if hub_mode != SUBSCRIBE_MODE:
        return False

    if not expected_token or hub_verify_token is None:
        return False

    # Compare (constant-time to prevent timing attacks)
    return hmac.compare_digest(
        hub_verify_token.encode("utf-8"),
        expected_token.encode("utf-8"),
    )
