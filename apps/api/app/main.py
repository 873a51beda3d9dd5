import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from walletauth_sdk.exceptions import (
    CanonicalizationError,
    ConfigurationError,
    SigningError,
    WalletAuthError,
)

from app.api.routes.health import router as health_router
from app.api.routes.users import router as users_router
from app.api.routes.wallets import router as wallets_router
from app.core.config import settings
from app.core.openapi import API_DESCRIPTION, install_custom_openapi
from app.observability.logging import configure_logging
from app.observability.request_logging import request_logging_middleware

logger = logging.getLogger("walletauth.errors")

_SIGNER_ERRORS: dict[type[WalletAuthError], tuple[int, str]] = {
    ConfigurationError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "SIGNER_MISCONFIGURED"),
    SigningError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "SIGNING_FAILED"),
    CanonicalizationError: (422, "INVALID_BODY"),
}


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    yield


app = FastAPI(
    title="Wallet Auth BFF",
    summary="Signed request relay for the Privy wallet custody API",
    description=API_DESCRIPTION,
    version="0.1.0",
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    servers=[
        {"url": "http://localhost:8000", "description": "Local development"},
    ],
    lifespan=lifespan,
)
app.openapi = install_custom_openapi(app)  # type: ignore[method-assign]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)


@app.exception_handler(WalletAuthError)
async def wallet_auth_error_handler(_: Request, exc: WalletAuthError) -> JSONResponse:
    status_code, code = _SIGNER_ERRORS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "SIGNING_FAILED")
    )
    logger.error(
        "request_signing_failed",
        extra={"event_name": "request_signing_failed", "error_code": code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"code": code, "message": str(exc)}},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid or missing field: {field}" if field else "Invalid request body"
    return JSONResponse(
        status_code=422,
        content={"detail": {"code": "VALIDATION_ERROR", "message": message}},
    )


app.include_router(health_router)
app.include_router(users_router)
app.include_router(wallets_router)
