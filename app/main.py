"""
FastAPI application entry point.
Main application instance with middleware and route configuration.
"""
from fastapi import FastAPI, Request, status, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import logging
import asyncio

from app.config import settings
from app.database import get_db, init_db, close_db, create_tables
from app.services.storage import MediaStorage, get_storage
from app.routes import admin_pages, auth, cms, gallery, pages, past_works, sections
from app.utils.rate_limit import limiter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(admin_pages.LoginRequired, admin_pages.login_redirect)

# Session cookies need explicit origins, so no wildcard here
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request with its response status."""
    method = request.method
    path = request.url.path
    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code} for {method} {path}")
        return response
    except Exception as e:
        logger.error(
            f"Error processing {method} {path}: {str(e)}\n"
            f"  Error type: {type(e).__name__}",
            exc_info=True
        )
        raise


app.include_router(auth.router, prefix="/api")
app.include_router(gallery.router, prefix="/api", tags=["gallery"])
app.include_router(cms.router, prefix="/api")
app.include_router(sections.commission_router, prefix="/api")
app.include_router(sections.about_router, prefix="/api")
app.include_router(past_works.router, prefix="/api")
app.include_router(admin_pages.router)
app.include_router(pages.router)


def add_cors_headers(response: JSONResponse, request: Request) -> JSONResponse:
    """
    Add CORS headers to error responses produced by the exception handlers,
    which bypass CORSMiddleware for unhandled errors.
    """
    origin = request.headers.get("origin")
    if origin and origin in settings.CORS_ORIGINS:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Vary"] = "Origin"
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions (401, 403, 404, etc.) with the standard error payload."""
    logger.warning(
        f"HTTPException on {request.method} {request.url.path}: "
        f"{exc.status_code} {exc.detail}"
    )

    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail, "detail": str(exc.detail)}

    response = JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )
    return add_cors_headers(response, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    response = JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "detail": jsonable_errors(exc),
        }
    )
    return add_cors_headers(response, request)


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input objects (uploads are not JSON serializable)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions; the process keeps serving."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {str(exc)}",
        exc_info=True
    )
    response = JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred"
        }
    )
    return add_cors_headers(response, request)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.API_VERSION}


@app.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """Database health check: runs SELECT 1 against the backend."""
    try:
        result = await db.execute(text("SELECT 1"))
        return {
            "database": "connected",
            "status": "healthy",
            "result": result.scalar()
        }
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)
        return {
            "database": "error",
            "status": "unhealthy",
            "error": "Database connection failed"
        }


@app.get("/health/storage")
async def health_check_storage(storage: MediaStorage = Depends(get_storage)):
    """Storage health check: reports whether credentials are configured."""
    if storage.validate_config():
        return {"storage": "configured", "status": "healthy", "cloud_name": storage.cloud_name}
    return {
        "storage": "not_configured",
        "status": "warning",
        "message": "Cloudinary credentials not set in environment variables"
    }


@app.on_event("startup")
async def startup_event():
    """
    Check the backend connection on startup.
    Non-blocking: the app starts even if the database is unreachable.
    """
    if settings.DATABASE_URL:
        try:
            await init_db()
        except Exception as e:
            logger.error(
                f"Failed to initialize database on startup: {str(e)}\n"
                f"The application will continue to run, but content endpoints will fail."
            )
    else:
        logger.warning("DATABASE_URL not configured - using a throwaway in-memory database")
        await create_tables()

    get_storage()


@app.on_event("shutdown")
async def shutdown_event():
    try:
        await close_db()
    except Exception as e:
        if not isinstance(e, (KeyboardInterrupt, asyncio.CancelledError)):
            logger.warning(f"Error during database shutdown: {str(e)}")
