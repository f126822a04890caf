# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Staff notification dispatch.

One SMS per ``notify_*`` call; the ``notify_all_*`` variants fan out across
many phones concurrently and wait for every send to settle. A failed send is
recorded against its recipient and never cancels or aborts its siblings.
"""

import asyncio
from typing import Awaitable, Callable, Sequence

from ritepath.core.logging import get_logger
from ritepath.metrics.prometheus import FANOUT_RECIPIENTS, SMS_SEND_SECONDS, SMS_SENT
from ritepath.models.domain import (
    DocumentSignedNotification,
    FanOutResult,
    NewCaseNotification,
    NotificationRequest,
    RecipientResult,
    SendResult,
)
from ritepath.services.sms_client import SmsSendError, TwilioSmsClient

logger = get_logger(__name__)

SIGNATURE_FOOTER = "RitePath Funeral Services"


# ── Message templates ──

def case_link(app_url: str, case_id: str) -> str:
    return f"{app_url.rstrip('/')}/first-call?case={case_id}"


def render_new_case(req: NewCaseNotification, app_url: str) -> str:
    return (
        "\U0001F514 NEW FIRST CALL\n\n"
        f"Deceased: {req.deceased_name}\n"
        f"Next of Kin: {req.next_of_kin_name}\n"
        f"Location: {req.location_of_death}\n\n"
        f"View: {case_link(app_url, req.case_id)}"
    )


def render_document_signed(req: DocumentSignedNotification, app_url: str) -> str:
    return (
        "\u2705 DOCUMENT SIGNED\n\n"
        f"{req.signer_name} signed {req.document_type}\n"
        f"Case: {req.deceased_name}\n\n"
        f"View: {case_link(app_url, req.case_id)}"
    )


def render_signature_link(signer_name: str, deceased_name: str, signature_url: str) -> str:
    return (
        f"Hi {signer_name}, please sign the documents for {deceased_name}'s "
        f"arrangements. Click here: {signature_url} - {SIGNATURE_FOOTER}"
    )


def render_urgent(message: str) -> str:
    return f"\U0001F6A8 URGENT: {message}\n\n- RitePath"


class NotificationDispatcher:
    """Renders staff/family SMS messages and sends them through the provider."""

    def __init__(
        self,
        sms_client: TwilioSmsClient,
        from_number: str,
        app_url: str,
        send_timeout: float = 10.0,
    ) -> None:
        self._sms = sms_client
        self._from_number = from_number
        self._app_url = app_url
        self._timeout = send_timeout

    # ── Single sends ──

    async def notify_staff(self, staff_phone: str, request: NotificationRequest) -> SendResult:
        if isinstance(request, NewCaseNotification):
            body = render_new_case(request, self._app_url)
        elif isinstance(request, DocumentSignedNotification):
            body = render_document_signed(request, self._app_url)
        else:
            raise ValueError(f"Unsupported notification request: {type(request).__name__}")
        return await self._send(request.type, staff_phone, body)

    async def send_signature_link(
        self, to: str, signer_name: str, deceased_name: str, signature_url: str,
    ) -> SendResult:
        body = render_signature_link(signer_name, deceased_name, signature_url)
        return await self._send("signature-link", to, body)

    async def notify_staff_urgent(self, staff_phone: str, message: str) -> SendResult:
        return await self._send("urgent", staff_phone, render_urgent(message))

    # ── Fan-out ──

    async def notify_all_staff_new_case(
        self, phones: Sequence[str], case_data: NewCaseNotification,
    ) -> FanOutResult:
        return await self._fan_out(phones, lambda phone: self.notify_staff(phone, case_data))

    async def notify_all_staff_document_signed(
        self, phones: Sequence[str], document_data: DocumentSignedNotification,
    ) -> FanOutResult:
        return await self._fan_out(phones, lambda phone: self.notify_staff(phone, document_data))

    async def notify_all_staff(self, phones: Sequence[str], message: str) -> FanOutResult:
        return await self._fan_out(phones, lambda phone: self._send("broadcast", phone, message))

    async def _fan_out(
        self,
        phones: Sequence[str],
        send_one: Callable[[str], Awaitable[SendResult]],
    ) -> FanOutResult:
        phones = list(phones)
        FANOUT_RECIPIENTS.observe(len(phones))
        outcomes = await asyncio.gather(
            *(send_one(phone) for phone in phones), return_exceptions=True,
        )

        results: list[RecipientResult] = []
        for phone, outcome in zip(phones, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Unexpected error notifying %s: %r", phone, outcome)
                outcome = SendResult(success=False, error=str(outcome) or type(outcome).__name__)
            results.append(RecipientResult(phone=phone, **outcome.model_dump()))

        total_sent = sum(1 for r in results if r.success)
        total_failed = len(results) - total_sent
        logger.info("Sent to %d/%d staff members", total_sent, len(results))
        return FanOutResult(
            success=total_sent > 0,
            total_sent=total_sent,
            total_failed=total_failed,
            results=results,
        )

    # ── Provider call ──

    async def _send(self, kind: str, to: str, body: str) -> SendResult:
        try:
            with SMS_SEND_SECONDS.time():
                sid = await asyncio.wait_for(
                    self._sms.send_message(self._from_number, to, body),
                    timeout=self._timeout,
                )
        except SmsSendError as exc:
            SMS_SENT.labels(kind=kind, status="failed").inc()
            logger.error("Failed to send %s SMS to %s: %s", kind, to, exc)
            return SendResult(success=False, error=str(exc))
        except asyncio.TimeoutError:
            SMS_SENT.labels(kind=kind, status="timeout").inc()
            logger.error("Timed out after %.1fs sending %s SMS to %s", self._timeout, kind, to)
            return SendResult(success=False, error=f"SMS send timed out after {self._timeout}s")

        SMS_SENT.labels(kind=kind, status="sent").inc()
        logger.info("%s SMS sent to %s sid=%s", kind, to, sid)
        return SendResult(success=True, message_sid=sid)
