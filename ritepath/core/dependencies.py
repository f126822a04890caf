# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Dependency wiring: repositories and services are built once by the
application lifespan into a ``ServiceContainer`` stored on ``app.state``.
FastAPI dependency functions read from there; nothing connects at import time.
"""

from typing import Optional

import httpx
from fastapi import Request
from sqlalchemy.engine import Engine

from ritepath.core.config import Settings
from ritepath.core.database import build_engine
from ritepath.repositories.case_repository import CaseRepository
from ritepath.repositories.profile_repository import ProfileRepository
from ritepath.repositories.staff_repository import StaffRepository
from ritepath.services.notification_service import NotificationDispatcher
from ritepath.services.recipients import RecipientResolver
from ritepath.services.sms_client import TwilioSmsClient
from ritepath.services.webhook_service import SignatureWebhookRelay


class ServiceContainer:
    """Owns every long-lived collaborator of the service."""

    def __init__(
        self,
        config: Settings,
        engine: Engine,
        sms_client: TwilioSmsClient,
        http_client: Optional[httpx.AsyncClient] = None,
        staff_repo: Optional[StaffRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
    ) -> None:
        self.config = config
        self.engine = engine
        self.http_client = http_client
        self.sms_client = sms_client

        self.case_repo = CaseRepository(engine)
        self.staff_repo = staff_repo or StaffRepository(seed_defaults=config.SEED_DEFAULT_STAFF)
        self.profile_repo = profile_repo or ProfileRepository()

        self.resolver = RecipientResolver(self.staff_repo, self.profile_repo)
        self.dispatcher = NotificationDispatcher(
            sms_client,
            from_number=config.TWILIO_FROM_NUMBER,
            app_url=config.APP_URL,
            send_timeout=config.SMS_TIMEOUT,
        )
        self.webhook_relay = SignatureWebhookRelay(
            self.resolver, self.dispatcher, api_key=config.HELLOSIGN_API_KEY,
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "ServiceContainer":
        http_client = httpx.AsyncClient(timeout=config.SMS_TIMEOUT)
        sms_client = TwilioSmsClient(
            http_client,
            account_sid=config.TWILIO_ACCOUNT_SID,
            auth_token=config.TWILIO_AUTH_TOKEN,
            api_base=config.TWILIO_API_BASE,
        )
        return cls(config, build_engine(config), sms_client, http_client=http_client)

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
        self.case_repo.dispose()


# ── FastAPI dependency functions ──

def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_case_repo(request: Request) -> CaseRepository:
    return get_container(request).case_repo


def get_staff_repo(request: Request) -> StaffRepository:
    return get_container(request).staff_repo


def get_profile_repo(request: Request) -> ProfileRepository:
    return get_container(request).profile_repo


def get_resolver(request: Request) -> RecipientResolver:
    return get_container(request).resolver


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return get_container(request).dispatcher


def get_webhook_relay(request: Request) -> SignatureWebhookRelay:
    return get_container(request).webhook_relay
