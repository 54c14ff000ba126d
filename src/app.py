import json
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from src.infra.config.settings import settings
from src.infra.database import get_database_manager
from src.core.logger.logger import logger
from src.api.router import health, auth, checkin, websocket
from src.api.middleware.logging.request_logging import RequestLoggingMiddleware
from src.core.exceptions.handler import ServiceError, GlobalErrorHandler
from src.core.service.websocket.manager import ConnectionManager

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="""
Daily check-in rewards API.

## Services
- **Check-in**: once per UTC day, awards points and tracks the consecutive-day streak
- **Points**: current point balance for the caller
- **Revalidation**: WebSocket events telling the UI to refresh after a check-in

## Authentication
Endpoints read the caller from an optional JWT Bearer token. Anonymous callers
receive the documented defaults instead of errors.
        """,
        version=settings.APP_VERSION,
        docs_url="/",
        redoc_url="/redoc"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,  # 10 minutes
    )

    # Request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Centralized error handlers
    app.add_exception_handler(ServiceError, GlobalErrorHandler.service_error_handler)
    app.add_exception_handler(RequestValidationError, GlobalErrorHandler.validation_error_handler)
    app.add_exception_handler(Exception, GlobalErrorHandler.general_exception_handler)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(auth.router)  # /api/v1/auth prefix
    app.include_router(checkin.router)  # /api/v1 prefix
    app.include_router(websocket.router)  # /ws endpoint

    app.state.ws_manager = ConnectionManager()

    @app.on_event("startup")
    async def startup_event():
        logger.info(json.dumps({
            "message": "Starting check-in API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION
        }))

        try:
            await get_database_manager().connect()
        except Exception as e:
            logger.error(f"Database unavailable on startup: {str(e)}")

    @app.on_event("shutdown")
    async def shutdown_event():
        await get_database_manager().close()
        logger.info(json.dumps({
            "message": "Shutting down check-in API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION
        }))

    return app
