from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from config.settings import settings
from app.database import init_db, check_db_connection
from app.utils.exceptions import EssayServiceError, InternalError, PersistenceError
from app.utils.logging import setup_logging, MonitoringMiddleware

from app.api.routes.essays import router as essays_router
from app.api.routes.stats import router as stats_router

# Setup logging
setup_logging(
    level=settings.log_level,
    use_json=settings.log_json or not settings.debug,
    log_file=settings.log_file
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")
    await init_db()
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="""
    **Essay Evaluation Backend**

    Submit essay text and receive a heuristic assessment: an overall score,
    a five-category breakdown, strengths, improvement notes and rewrite
    suggestions. Scores come from surface text statistics plus bounded
    random variation, not from a trained model.

    Stored essays can be listed, filtered, sorted, updated and deleted,
    and aggregate statistics are available at `/api/stats`.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"]
)

app.add_middleware(MonitoringMiddleware)


def error_response(status_code: int, error: str, message: str = None) -> JSONResponse:
    content = {"success": False, "error": error}
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(EssayServiceError)
async def essay_service_exception_handler(request: Request, exc: EssayServiceError):
    message = exc.message if exc.message != exc.error else None
    if isinstance(exc, PersistenceError) and not settings.debug:
        message = "Something went wrong"
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return error_response(exc.status_code, exc.error, message)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return error_response(400, "Validation failed", details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(404, "Route not found")
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    internal = InternalError()
    return error_response(
        internal.status_code,
        internal.error,
        str(exc) if settings.debug else "Something went wrong"
    )


@app.get("/api/health", tags=["System"])
async def health_check():
    """Liveness plus database connectivity"""
    database_ok = await check_db_connection()
    return {
        "status": "OK",
        "message": f"{settings.app_name} is running",
        "database": "Connected" if database_ok else "Disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment
    }


@app.get("/", tags=["System"])
async def root():
    """API root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.version,
        "status": "running",
        "api_docs": "/docs",
        "health_check": "/api/health"
    }


app.include_router(essays_router)
app.include_router(stats_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=5000,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning",
    )
