import sys
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .application.ports.verify_provider import VerifyProvider
from .application.services.verification_service import VerificationService
from .config import Settings, load_environment, load_settings
from .exceptions import ConfigurationError
from .infrastructure.audit.std_logger import StdAuditLogger
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, SecurityMiddleware
from .routers import verify_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", fmt: Optional[str] = None, force: bool = False) -> None:
    logging.basicConfig(
        force=force,
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_provider(settings: Settings) -> VerifyProvider:
    if settings.VERIFY_PROVIDER == "twilio":
        from .infrastructure.verify.twilio_provider import TwilioVerifyProvider
        return TwilioVerifyProvider(
            settings.TWILIO_ACCOUNT_SID,
            settings.TWILIO_AUTH_TOKEN,
            settings.TWILIO_VERIFY_SERVICE_SID,
            timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        )

    from .infrastructure.verify.messagebird_provider import MessageBirdVerifyProvider
    return MessageBirdVerifyProvider(
        settings.MESSAGEBIRD_API_KEY,
        base_url=settings.MESSAGEBIRD_BASE_URL,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )


def create_app(settings: Optional[Settings] = None, provider: Optional[VerifyProvider] = None) -> FastAPI:
    """Build the application with one provider client shared by all requests."""
    if settings is None:
        load_environment()
        settings = load_settings()
    if provider is None:
        provider = build_provider(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV}, provider={settings.VERIFY_PROVIDER})")
        yield
        logger.info(f"Shutting down {settings.APP_NAME}...")
        provider.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.verification_service = VerificationService(provider=provider, audit_logger=StdAuditLogger())

    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)

    app.include_router(verify_router.router)
    return app


def run() -> None:
    """Validate configuration, then serve. Exits non-zero before binding on bad config."""
    configure_logging()
    try:
        load_environment()
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical(f"Startup aborted: {e}")
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, force=True)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
