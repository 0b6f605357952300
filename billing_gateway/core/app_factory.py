from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..domain.errors import GatewayError, NotFound
from ..domain.ports.payment_processor import PaymentProcessor
from ..presentation.api.routers import config as config_router
from ..presentation.api.routers import products as products_router
from ..presentation.api.routers import subscriptions as subscriptions_router
from ..services.billing_service import BillingService
from ..services.stripe_gateway import StripeGateway

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Expires": "0",
    "Pragma": "no-cache",
}


def create_application(
    settings: Optional[Settings] = None,
    processor: Optional[PaymentProcessor] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Billing Gateway",
        lifespan=_create_lifespan(settings, processor),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def disable_caching(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response

    _register_exception_handlers(app)

    app.include_router(config_router.router)
    app.include_router(products_router.router)
    app.include_router(subscriptions_router.router)

    return app


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths are both "not found".
        if exc.status_code in (404, 405):
            not_found = NotFound()
            return error_response(not_found.status_code, not_found.message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return error_response(400, "Invalid request parameters")


def _create_lifespan(settings: Settings, processor: Optional[PaymentProcessor]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        gateway = processor or StripeGateway(
            secret_key=settings.stripe_secret_key,
            api_version=settings.stripe_api_version,
        )
        billing_service = BillingService(gateway, settings)

        app.state.container = ApplicationContainer(  # type: ignore[attr-defined]
            settings=settings,
            billing_service=billing_service,
        )
        logger.info("Billing gateway ready (Stripe configured: %s)", gateway.is_configured)

        try:
            yield
        finally:
            app.state.container = None  # type: ignore[attr-defined]

    return lifespan
