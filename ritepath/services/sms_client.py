# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: SMS provider client for the Twilio Messages REST API over httpx.
Falls back to mock delivery (log only) when credentials are not configured.
"""

import uuid
from typing import Optional

import httpx

from ritepath.core.logging import get_logger

logger = get_logger(__name__)


class SmsSendError(Exception):
    """The provider refused the message or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TwilioSmsClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        account_sid: str = "",
        auth_token: str = "",
        api_base: str = "https://api.twilio.com/2010-04-01",
    ) -> None:
        self._http = http_client
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._api_base = api_base.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self._account_sid and self._auth_token)

    async def send_message(self, from_number: str, to: str, body: str) -> str:
        """Send one SMS and return the provider message sid."""
        if not self.configured:
            sid = f"SMmock{uuid.uuid4().hex}"
            logger.info("[MOCK SMS] From: %s | To: %s | Body: %s", from_number, to, body)
            return sid

        url = f"{self._api_base}/Accounts/{self._account_sid}/Messages.json"
        try:
            resp = await self._http.post(
                url,
                data={"From": from_number, "To": to, "Body": body},
                auth=(self._account_sid, self._auth_token),
            )
        except httpx.HTTPError as exc:
            raise SmsSendError(f"SMS provider unreachable: {exc}") from exc

        if resp.status_code >= 300:
            try:
                detail = resp.json().get("message", resp.text)
            except ValueError:
                detail = resp.text
            raise SmsSendError(
                f"SMS provider returned {resp.status_code}: {detail}",
                status_code=resp.status_code,
            )
        try:
            sid = resp.json()["sid"]
        except (ValueError, KeyError, TypeError) as exc:
            raise SmsSendError(
                f"SMS provider returned {resp.status_code} without a message sid",
                status_code=resp.status_code,
            ) from exc
        if not sid:
            raise SmsSendError(
                f"SMS provider returned {resp.status_code} without a message sid",
                status_code=resp.status_code,
            )
        return sid
