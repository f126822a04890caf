# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
RitePath Case & Notification Service
====================================
Case reads over the hosted ``cases`` table, the staff/vendor directory, and
SMS fan-out to funeral directors and removal teams (new first calls, signed
documents, signature links), plus the e-signature provider webhook relay.

Port: 8000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ritepath.controllers import (
    case_controller,
    notification_controller,
    profile_controller,
    staff_controller,
    system_controller,
    webhook_controller,
)
from ritepath.core.config import settings
from ritepath.core.dependencies import ServiceContainer
from ritepath.core.logging import get_logger
from ritepath.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Build the service container on startup unless one was injected; close it on shutdown."""
    owned = getattr(application.state, "container", None) is None
    if owned:
        application.state.container = ServiceContainer.from_settings(settings)
    container = application.state.container
    logger.info(
        "RitePath service starting: sms=%s, staff=%d",
        "twilio" if container.sms_client.configured else "mock",
        len(container.staff_repo.list_staff()),
    )
    yield
    logger.info("RitePath service shutting down")
    if owned:
        await container.aclose()
        application.state.container = None


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    application = FastAPI(
        title="RitePath Case & Notification Service",
        description="Case reads, staff directory and SMS notification fan-out for funeral homes.",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.state.container = container

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled exception", extra={"request_id": req_id})
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
        )

    application.include_router(system_controller.router)
    application.include_router(case_controller.router)
    application.include_router(notification_controller.router)
    application.include_router(webhook_controller.router)
    application.include_router(staff_controller.router)
    application.include_router(profile_controller.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
