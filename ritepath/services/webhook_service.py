# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: E-signature provider webhook relay.

Turns ``signature_request_signed`` events into document-signed staff
notifications. Dispatch outcomes never surface to the provider: once an event
is parsed it is acknowledged, so a notification outage cannot trigger a
retry storm.
"""

import hashlib
import hmac
from typing import Any, Optional

from ritepath.core.logging import get_logger
from ritepath.metrics.prometheus import WEBHOOK_EVENTS
from ritepath.models.domain import DocumentSignedNotification
from ritepath.services.notification_service import NotificationDispatcher
from ritepath.services.recipients import RecipientResolver

logger = get_logger(__name__)

LOGGED_ONLY_EVENTS = {
    "signature_request_viewed": "Document viewed",
    "signature_request_sent": "Document sent",
    "signature_request_declined": "Document declined",
}


class InvalidWebhookSignature(Exception):
    """The event hash does not match the configured API key."""


def compute_event_hash(api_key: str, event_time: str, event_type: str) -> str:
    return hmac.new(
        api_key.encode(), f"{event_time}{event_type}".encode(), hashlib.sha256,
    ).hexdigest()


class SignatureWebhookRelay:
    def __init__(
        self,
        resolver: RecipientResolver,
        dispatcher: NotificationDispatcher,
        api_key: str = "",
    ) -> None:
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._api_key = api_key

    def verify(self, event: dict[str, Any]) -> None:
        """Check ``event_hash`` when an API key is configured. Raises InvalidWebhookSignature."""
        if not self._api_key:
            return
        expected = compute_event_hash(
            self._api_key, str(event.get("event_time", "")), str(event.get("event_type", "")),
        )
        if not hmac.compare_digest(expected, str(event.get("event_hash", ""))):
            raise InvalidWebhookSignature("Invalid webhook signature")

    async def handle(self, payload: Any) -> None:
        event = payload.get("event") if isinstance(payload, dict) else None
        if not isinstance(event, dict):
            event = {}
        event_type = event.get("event_type")
        logger.info("HelloSign webhook received: %s", event_type)
        self.verify(event)
        if not isinstance(event_type, str):
            WEBHOOK_EVENTS.labels(event_type="other").inc()
            logger.info("Unhandled event type: %r", event_type)
            return
        known = event_type == "signature_request_signed" or event_type in LOGGED_ONLY_EVENTS
        WEBHOOK_EVENTS.labels(event_type=event_type if known else "other").inc()

        if event_type == "signature_request_signed":
            signature_request = event.get("signature_request")
            await self._on_signed(signature_request if isinstance(signature_request, dict) else {})
        elif event_type in LOGGED_ONLY_EVENTS:
            logger.info(LOGGED_ONLY_EVENTS[event_type])
        else:
            logger.info("Unhandled event type: %s", event_type)

    async def _on_signed(self, signature_request: dict[str, Any]) -> None:
        metadata = signature_request.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        case_id = metadata.get("case_id")
        if not case_id:
            logger.info("Signed event without case_id; no staff to notify")
            return

        notification = DocumentSignedNotification(
            signer_name=str(_first_signer(signature_request) or "Family member"),
            document_type=str(metadata.get("document_type") or "Document"),
            deceased_name=str(metadata.get("deceased_name") or "Case"),
            case_id=str(case_id),
        )
        phones = self._resolver.get_notifiable_staff()
        try:
            result = await self._dispatcher.notify_all_staff_document_signed(phones, notification)
        except Exception:
            logger.exception("Failed to notify staff for case %s", case_id)
            return

        for failed in (r for r in result.results if not r.success):
            logger.warning("Staff %s not notified for case %s: %s", failed.phone, case_id, failed.error)
        logger.info(
            "Staff notified of signed document for case %s (sent=%d, failed=%d)",
            case_id, result.total_sent, result.total_failed,
        )


def _first_signer(signature_request: dict[str, Any]) -> Optional[str]:
    signatures = signature_request.get("signatures")
    if isinstance(signatures, list) and signatures and isinstance(signatures[0], dict):
        return signatures[0].get("signer_name")
    return None
