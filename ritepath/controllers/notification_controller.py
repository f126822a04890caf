# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Staff notification and signature-link SMS endpoints.

Bodies are validated here and rejected with 400 before the dispatcher (and
so the SMS provider) is ever touched.
"""
import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ritepath.core.dependencies import get_dispatcher, get_resolver
from ritepath.core.logging import get_logger
from ritepath.models.domain import FanOutResult, NewCaseNotification, SendResult
from ritepath.schemas import (
    BroadcastRequest,
    ErrorResponse,
    RecipientsResponse,
    SignatureSmsRequest,
    SmsSentResponse,
    UrgentNotifyRequest,
    notification_request_adapter,
)
from ritepath.services.notification_service import NotificationDispatcher
from ritepath.services.recipients import RecipientResolver

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Notifications"])

NOTIFICATION_TYPES = ("new-case", "document-signed")


def _error(status_code: int, error: str, details: Any = None) -> JSONResponse:
    content = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content)


def _error_fields(exc: ValidationError) -> list[str]:
    return [".".join(str(p) for p in err["loc"]) for err in exc.errors()]


async def _json_body(request: Request) -> Any:
    return json.loads(await request.body())


def _send_response(result: SendResult):
    if result.success:
        return SmsSentResponse(message_sid=result.message_sid).model_dump(by_alias=True)
    return _error(500, "Failed to send SMS", result.error)


def _parse_notification(body: dict[str, Any]):
    """Validate the type-specific fields; returns (request, error_response)."""
    if body.get("type") not in NOTIFICATION_TYPES:
        return None, _error(400, "Invalid notification type")
    fields = {k: v for k, v in body.items() if k not in ("staffPhone", "phones")}
    try:
        return notification_request_adapter.validate_python(fields), None
    except ValidationError as exc:
        return None, _error(400, "Missing required fields", _error_fields(exc))


def _recipients(phones: Optional[list], resolver: RecipientResolver) -> list[str]:
    if phones is None:
        return resolver.get_notifiable_staff()
    return list(dict.fromkeys(str(p) for p in phones if p))


# ── Single sends ──

@router.post("/notify-staff", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def notify_staff(request: Request,
                       dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    try:
        body = await _json_body(request)
    except ValueError as exc:
        logger.error("Notification API error: %s", exc)
        return _error(500, "Internal server error")
    if not isinstance(body, dict):
        body = {}

    staff_phone = body.get("staffPhone")
    if not staff_phone:
        return _error(400, "Staff phone number is required")

    notification, error = _parse_notification(body)
    if error is not None:
        return error

    result = await dispatcher.notify_staff(str(staff_phone), notification)
    return _send_response(result)


@router.post("/notify-staff/urgent", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def notify_staff_urgent(request: Request,
                              dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    try:
        payload = UrgentNotifyRequest.model_validate(await _json_body(request))
    except ValidationError as exc:
        return _error(400, "Missing required fields", _error_fields(exc))
    except ValueError as exc:
        logger.error("Urgent notification API error: %s", exc)
        return _error(500, "Internal server error")

    result = await dispatcher.notify_staff_urgent(payload.staff_phone, payload.message)
    return _send_response(result)


@router.post("/send-signature-sms", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def send_signature_sms(request: Request,
                             dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    try:
        payload = SignatureSmsRequest.model_validate(await _json_body(request))
    except ValidationError:
        return _error(400, "Missing required fields")
    except ValueError as exc:
        logger.error("Signature SMS API error: %s", exc)
        return _error(500, "Internal server error")

    result = await dispatcher.send_signature_link(
        payload.to, payload.signer_name, payload.deceased_name, payload.signature_url,
    )
    return _send_response(result)


# ── Fan-out ──

@router.get("/notify-staff/recipients", response_model=RecipientsResponse)
async def list_recipients(resolver: RecipientResolver = Depends(get_resolver)):
    return RecipientsResponse(phones=resolver.get_notifiable_staff())


@router.post("/notify-staff/all", response_model=FanOutResult,
             responses={400: {"model": ErrorResponse}})
async def notify_all_staff(request: Request,
                           dispatcher: NotificationDispatcher = Depends(get_dispatcher),
                           resolver: RecipientResolver = Depends(get_resolver)):
    try:
        body = await _json_body(request)
    except ValueError as exc:
        logger.error("Fan-out API error: %s", exc)
        return _error(500, "Internal server error")
    if not isinstance(body, dict):
        body = {}

    phones = body.get("phones")
    if phones is not None and not isinstance(phones, list):
        return _error(400, "phones must be a list")

    notification, error = _parse_notification(body)
    if error is not None:
        return error

    recipients = _recipients(phones, resolver)
    if isinstance(notification, NewCaseNotification):
        return await dispatcher.notify_all_staff_new_case(recipients, notification)
    return await dispatcher.notify_all_staff_document_signed(recipients, notification)


@router.post("/notify-staff/broadcast", response_model=FanOutResult,
             responses={400: {"model": ErrorResponse}})
async def broadcast(request: Request,
                    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
                    resolver: RecipientResolver = Depends(get_resolver)):
    try:
        payload = BroadcastRequest.model_validate(await _json_body(request))
    except ValidationError as exc:
        return _error(400, "Missing required fields", _error_fields(exc))
    except ValueError as exc:
        logger.error("Broadcast API error: %s", exc)
        return _error(500, "Internal server error")

    return await dispatcher.notify_all_staff(_recipients(payload.phones, resolver), payload.message)
