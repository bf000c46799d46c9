"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from camp_registration.api.admin import router as admin_router
from camp_registration.api.auth import router as auth_router
from camp_registration.api.camper import router as camper_router
from camp_registration.app_logging import configure_logging
from camp_registration.containers import AppContainer
from camp_registration.errors import (
    AlreadyRegistered,
    CampNotFound,
    CampRegistrationError,
    InquiryNotFound,
    ProfileAlreadyExists,
    ProfileRequired,
    QuestionNotFound,
    RegistrationClosed,
    RegistrationNotFound,
    StoreUnavailable,
    Unauthenticated,
    ValidationError,
)

PROFILE_SETUP_PATH = "/setup-profile"
HOME_PATH = "/"

_ERROR_STATUS: dict[type[CampRegistrationError], int] = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AlreadyRegistered: status.HTTP_409_CONFLICT,
    ProfileAlreadyExists: status.HTTP_409_CONFLICT,
    ProfileRequired: status.HTTP_403_FORBIDDEN,
    RegistrationClosed: status.HTTP_409_CONFLICT,
    RegistrationNotFound: status.HTTP_404_NOT_FOUND,
    CampNotFound: status.HTTP_404_NOT_FOUND,
    QuestionNotFound: status.HTTP_404_NOT_FOUND,
    InquiryNotFound: status.HTTP_404_NOT_FOUND,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting camp registration API (%s)", container.settings.environment
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(camper_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    @app.exception_handler(CampRegistrationError)
    async def handle_domain_error(
        request: Request, exc: CampRegistrationError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if isinstance(exc, StoreUnavailable):
            logger.error("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=status_code, content=error_body(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: CampRegistrationError) -> int:
    """Return the HTTP status for an error, walking its class hierarchy."""
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


def error_body(exc: CampRegistrationError) -> dict[str, object]:
    """Return the JSON body for an error response."""
    body: dict[str, object] = {"error": type(exc).__name__, "detail": exc.message}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    elif isinstance(exc, ProfileRequired):
        body["redirect"] = PROFILE_SETUP_PATH
    elif isinstance(exc, ProfileAlreadyExists):
        body["redirect"] = HOME_PATH
    return body
