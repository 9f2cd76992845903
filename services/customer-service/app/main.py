"""
Customer Service - FastAPI Application
Account registration and login, plus the member item catalog
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from shared.utils.logger import setup_logging, get_request_logger
from shared.utils.security import HashingError

from app.config import Settings, get_settings
from app.exceptions import AccountServiceError
from app.routes import accounts, health, items
from app.utils.database import init_stores, close_pool

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    settings: Settings = app.state.settings
    logger.info("Customer Service starting up", store_backend=settings.store_backend)

    account_store, item_store, pool = await init_stores(settings)
    app.state.account_store = account_store
    app.state.item_store = item_store

    logger.info("Customer Service startup complete")

    yield

    logger.info("Customer Service shutting down")
    await close_pool(pool)


def register_exception_handlers(app: FastAPI) -> None:
    request_logger = get_request_logger()

    @app.exception_handler(AccountServiceError)
    async def service_error_handler(request: Request, exc: AccountServiceError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                path=request.url.path,
                error_type=type(exc).__name__,
                error=exc.message,
                exc_info=exc,
            )
            return _error_response(exc.status_code, "Internal server error")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(HashingError)
    async def hashing_error_handler(request: Request, exc: HashingError):
        logger.error("Password hashing failed", path=request.url.path, exc_info=exc)
        return _error_response(500, "Internal server error")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request", path=request.url.path, errors=len(exc.errors()))
        return _error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Custom HTTP exception handler"""
        return _error_response(exc.status_code, exc.detail)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error", path=request.url.path)
            response = _error_response(500, "Internal server error")
        request_logger.log_request(
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - start,
            ip_address=request.client.host if request.client else None,
        )
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around explicitly supplied settings"""
    settings = settings or get_settings()
    setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="Account registration, login and the member item catalog",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(accounts.router, prefix="/accounts", tags=["Accounts"])
    app.include_router(items.router, prefix="/items", tags=["Items"])
    app.include_router(items.photos_router, prefix="/photos", tags=["Photos"])

    # Paths the web client calls
    app.include_router(accounts.router, prefix="/api/accounts", include_in_schema=False)
    app.include_router(accounts.router, prefix="/api/users", include_in_schema=False)
    app.include_router(items.router, prefix="/api/items", include_in_schema=False)
    app.include_router(items.photos_router, prefix="/api/photos", include_in_schema=False)

    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="images",
    )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.app_name,
            "version": settings.version,
            "description": "Account registration, login and the member item catalog",
            "docs": "/docs"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=get_settings().debug,
        log_level="info"
    )
