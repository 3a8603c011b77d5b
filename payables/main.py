"""
Contas a Pagar API: FastAPI application entry point.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import Headers
from starlette.types import Receive, Scope, Send

from payables import __version__
from payables.config import Settings, settings as default_settings
from payables.database import ConnectionPool, provision_schema
from payables.exceptions import InvalidAmount, PersistenceFailed, ValidationFailed

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


class PreflightCORSMiddleware(CORSMiddleware):
    """CORS allow-list that answers every preflight with 200.

    A disallowed origin gets a bare preflight (no allow headers), so the
    browser stops there; a real request from it is refused with 403 before
    it reaches any route.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)
            origin = headers.get("origin")
            is_preflight = (
                scope["method"] == "OPTIONS" and "access-control-request-method" in headers
            )
            if origin is not None and not is_preflight and not self.is_allowed_origin(origin=origin):
                logger.info("Blocked request from origin %s", origin)
                response = JSONResponse(
                    status_code=403, content={"error": "Origem não permitida pelo CORS."}
                )
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers: Headers):
        response = super().preflight_response(request_headers)
        if response.status_code == 200:
            return response
        return PlainTextResponse("OK", status_code=200)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the table must exist before the first request is served
    pool: ConnectionPool = app.state.pool
    try:
        provision_schema(pool)
    except Exception:
        logger.critical("ERRO FATAL ao iniciar o banco (%s)", pool.engine.url, exc_info=True)
        raise
    logger.info(
        "Database ready (%s), table 'contas_a_pagar' OK, pool capacity %d",
        pool.engine.url,
        pool.capacity,
    )

    yield
    pool.dispose()
    logger.info("Shutting down")


# ── error mapping ────────────────────────────────────────────────────────
async def invalid_amount_handler(request: Request, exc: InvalidAmount):
    return JSONResponse(status_code=400, content={"error": exc.message})


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "violations": exc.violations},
    )


async def malformed_request_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Corpo da requisição inválido: envie um objeto JSON."},
    )


async def persistence_failed_handler(request: Request, exc: PersistenceFailed):
    logger.error("Erro ao inserir dados: %s", exc.details, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Falha interna ao registrar a conta.", "details": exc.details},
    )


def create_app(
    settings: Optional[Settings] = None,
    pool: Optional[ConnectionPool] = None,
) -> FastAPI:
    """Build the application; the pool it owns is reachable as ``app.state.pool``."""
    settings = settings or default_settings
    if pool is None:
        pool = ConnectionPool(
            settings.database_url,
            size=settings.DB_POOL_SIZE,
            timeout=settings.DB_POOL_TIMEOUT,
            echo=settings.DB_ECHO,
        )

    app = FastAPI(
        title="Contas a Pagar",
        description="Accounts-payable ingestion: normalize → validate → store",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.pool = pool

    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    app.add_exception_handler(InvalidAmount, invalid_amount_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, malformed_request_handler)
    app.add_exception_handler(PersistenceFailed, persistence_failed_handler)

    @app.get("/")
    async def root():
        return {"message": "API de Contas a Pagar está online!"}

    @app.get("/health")
    async def health_check():
        return {"ok": True}

    # ── Register API router ──────────────────────────────────────────────
    from payables.routers.payables import router as payables_router

    app.include_router(payables_router, tags=["Contas a Pagar"])
    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        "payables.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=default_settings.PORT,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
