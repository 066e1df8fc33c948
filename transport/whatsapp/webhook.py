"""
WhatsApp Webhook Receiver

FastAPI router for the per-store WhatsApp Business webhook.
- GET:  subscription handshake (hub.mode / hub.verify_token / hub.challenge)
- POST: message delivery, handed to the store's conversation manager

No dialogue logic. No retries.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.concurrency import run_in_threadpool

from conversation import ConversationManagerFactory
from infra import bootstrap_infrastructure
from stores import CredentialStore

from .normalize import extract_message, extract_statuses
from .security import verify_webhook_challenge

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks/whatsapp/message", tags=["WhatsApp Webhook"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_credential_store() -> CredentialStore:
    """Credential store from the process-wide bootstrap."""
    return bootstrap_infrastructure().get_credential_store()


def get_conversation_manager_factory() -> ConversationManagerFactory:
    """Conversation manager factory from the process-wide bootstrap."""
    return bootstrap_infrastructure().get_conversation_manager_factory()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================================
# WEBHOOK CHALLENGE (Setup only)
# ============================================================================

@router.get("/{store_id}")
async def whatsapp_webhook_challenge(
    store_id: str,
    hub_mode: Optional[str] = Query(None, alias="hub.mode"),
    hub_verify_token: Optional[str] = Query(None, alias="hub.verify_token"),
    hub_challenge: Optional[str] = Query(None, alias="hub.challenge"),
    credential_store: CredentialStore = Depends(get_credential_store),
) -> Response:
    """
    Verify webhook subscription challenge from Meta.

    The token is checked against the store's configured webhook secret.

    Returns:
        200 with hub.challenge echoed as plain text
        404 if the store does not exist
        403 if the mode or token is wrong
        500 on any other error
    """
    try:
        store = await run_in_threadpool(credential_store.get, store_id)
        if store is None:
            return _error(status.HTTP_404_NOT_FOUND, "Store not found")

        if verify_webhook_challenge(hub_mode, hub_verify_token, store.webhook_secret):
            logger.info("Webhook verified", extra={"store_id": store_id})
            return PlainTextResponse(hub_challenge or "")

        logger.error("Webhook verification failed", extra={"store_id": store_id})
        return _error(status.HTTP_403_FORBIDDEN, "Verification failed")

    except Exception as e:
        logger.error(f"Error verifying webhook: {e}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# ============================================================================
# WEBHOOK RECEIVER (Message processing)
# ============================================================================

@router.post("/{store_id}")
async def whatsapp_webhook_receiver(
    store_id: str,
    request: Request,
    credential_store: CredentialStore = Depends(get_credential_store),
    manager_factory: ConversationManagerFactory = Depends(get_conversation_manager_factory),
) -> Response:
    """
    Receive WhatsApp messages via webhook.

    Flow:
    1. Parse body, look up store (404 if unknown)
    2. Extract first message; anything else is acknowledged as-is
    3. Initialize the store's conversation manager (500 if it fails)
    4. Hand the message to the manager
    5. Mark the message as read

    Returns:
        {"success": true} for handled messages and non-message events
    """
    try:
        body = await request.json()

        store = await run_in_threadpool(credential_store.get, store_id)
        if store is None:
            return _error(status.HTTP_404_NOT_FOUND, "Store not found")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Received webhook: %s", json.dumps(body, indent=2))

        inbound = extract_message(body)
        if inbound is None:
            # Not a message: status update or another event
            statuses = extract_statuses(body)
            if statuses:
                logger.debug(
                    f"Received {len(statuses)} status update(s)",
                    extra={"store_id": store_id},
                )
            return JSONResponse(content={"success": True})

        logger.info(
            f"Received message from {inbound.sender_id}",
            extra={
                "store_id": store_id,
                "sender_id": inbound.sender_id,
                "message_id": inbound.message_id,
                "message_type": inbound.message_type,
            },
        )

        manager = manager_factory(store_id)
        if not await manager.initialize():
            logger.error(
                "Failed to initialize conversation manager",
                extra={"store_id": store_id},
            )
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to initialize conversation manager",
            )

        await manager.process_message(inbound.sender_id, inbound.payload)

        message_client = manager.get_message_client()
        if message_client is not None:
            await message_client.mark_message_as_read(inbound.message_id)

        return JSONResponse(content={"success": True})

    except Exception as e:
        logger.error(f"Error handling webhook: {e}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
