from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
from src.domain.base import utcnow
import logging

logger = logging.getLogger(__name__)


def error_body(code: str, message: str) -> dict:
    return {
        "success": False,
        "message": message,
        "code": code,
        "timestamp": utcnow().isoformat() + "Z",
    }


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.code, exc.base_error.message),
        headers=exc.headers,
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.code, "Internal server error"),
        headers=exc.headers,
    )


def build_session_scheduler(ApplicationConfig):
    from src.app.jobs.session_reconciliation_job import SessionReconciliationJob
    from src.app.services.interval_scheduler import IntervalScheduler
    from src.depends import create_unit_of_work

    job = SessionReconciliationJob(
        create_unit_of_work,
        delete_old_revoked=ApplicationConfig.DELETE_OLD_REVOKED_SESSIONS,
        revoked_retention=timedelta(days=ApplicationConfig.REVOKED_SESSION_RETENTION_DAYS),
    )
    return IntervalScheduler(
        job.run,
        ApplicationConfig.SESSION_CLEANUP_INTERVAL_SECONDS,
        name="session-reconciliation",
    )


def create_app(ApplicationConfig, create_tables: bool = False) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_tables:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        scheduler = None
        if ApplicationConfig.SESSION_CLEANUP_ENABLED:
            scheduler = build_session_scheduler(ApplicationConfig)
            scheduler.start()
        else:
            logger.info("Session reconciliation disabled")

        app.state.session_scheduler = scheduler
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()

    app = FastAPI(title="HRMS Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
