# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: inbound e-signature provider webhook."""
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ritepath.core.dependencies import get_webhook_relay
from ritepath.core.logging import get_logger
from ritepath.services.webhook_service import InvalidWebhookSignature, SignatureWebhookRelay

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Webhooks"])


@router.post("/hellosign-webhook")
async def hellosign_webhook(request: Request,
                            relay: SignatureWebhookRelay = Depends(get_webhook_relay)):
    try:
        payload = json.loads(await request.body())
    except ValueError as exc:
        logger.error("HelloSign webhook error: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Webhook processing failed"})

    try:
        await relay.handle(payload)
    except InvalidWebhookSignature as exc:
        logger.warning("Rejected webhook: %s", exc)
        return JSONResponse(status_code=401, content={"error": str(exc)})
    return {"success": True}
