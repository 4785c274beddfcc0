# emissions/main.py
"""
FastAPI application entry point.
create_app() is the composition root: it owns the Database, registers the
domain error handlers, middleware and all routers.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from emissions.config import settings
from emissions.database import Database
from emissions.exceptions import ConflictError, NotFoundError, RenderError, ValidationError
from emissions.routers import certificates, health, tests, vehicles, verify
from emissions.utils.logger import get_logger

logger = get_logger(__name__)


def _describe_request_error(error: dict) -> str:
    """'year: Input should be a valid integer...' for a pydantic request error."""
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


def _register_exception_handlers(app: FastAPI):

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Missing or mistyped fields; same shape as form validation, input not echoed
        details = [_describe_request_error(error) for error in exc.errors()]
        logger.info(f"Malformed request on {request.url.path}: {details}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation failed", "details": details},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation failed", "details": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        logger.warning(f"Conflict on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": "Failed to save vehicle data", "details": str(exc)},
        )

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError):
        logger.error(f"Certificate rendering failed on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Failed to generate certificate PDF"},
        )

    # ── Global Exception Handler ─────────────────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(database: Optional[Database] = None) -> FastAPI:
    database = database or Database(settings.DATABASE_URL)

    app = FastAPI(
        title="Vehicle Emissions Certification API",
        description="Emissions test recording, PASS/FAIL certificates with QR verification.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.database = database

    # ── CORS (front-desk UI and public verification page) ───────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    _register_exception_handlers(app)

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(vehicles.router,     prefix="/api/v1", tags=["Test Submission"])
    app.include_router(tests.router,        prefix="/api/v1", tags=["Test Results"])
    app.include_router(certificates.router, prefix="/api/v1", tags=["Certificates"])
    app.include_router(verify.router,       prefix="/api/v1", tags=["Verification"])
    app.include_router(health.router,       prefix="/api/v1", tags=["Health"])

    # ── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("Emissions certification backend starting up...")
        app.state.database.initialize()
        logger.info("Database tables ready")
        logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
        logger.info("API docs at /docs")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Emissions certification backend shutting down...")
        app.state.database.dispose()

    return app


app = create_app()
