"""
PayDesk — FastAPI Application Entry Point

Aggregates all routers, configures middleware and error rendering,
and initializes the database on startup.
"""
import logging
import time
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.database import get_db, init_db
from paydesk.errors import PayDeskError, AuthorizationError, ProviderError, ValidationError
from paydesk.logging_config import setup_logging
from paydesk.routes import profile_router, config_router, checkout_router, payment_router, admin_router
from paydesk.schemas.schemas import ErrorResponse, HealthResponse
from paydesk.services.configuration_service import ConfigurationService

settings = get_settings()
setup_logging()
logger = logging.getLogger("paydesk.main")

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Payments backend for the PayDesk dashboard. "
        "Covers Aadhaar-masked user registration, admin-gated Stripe configuration, "
        "hosted checkout sessions, and an append-only per-user payment ledger."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Initialize database tables and log boot info."""
    init_db()

    logger.info(
        "\n%s\n  %s v%s\n  TIME: %s\n  ADMINS: %d configured\n  DATABASE: %s\n  DEBUG: %s\n%s",
        "=" * 60,
        settings.APP_NAME, settings.APP_VERSION,
        datetime.now().isoformat(),
        len(settings.ADMIN_PRINCIPALS),
        settings.DATABASE_URL,
        settings.DEBUG,
        "=" * 60,
    )


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


# ─── Error Rendering ─────────────────────────────────────────────────
def _error_response(status_code: int, detail: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, error_code=error_code).model_dump(),
    )


@app.exception_handler(PayDeskError)
async def paydesk_error_handler(request: Request, exc: PayDeskError):
    """Render domain errors; denials and provider diagnostics are sanitized."""
    detail = exc.detail
    if isinstance(exc, AuthorizationError):
        logger.warning("Denied %s %s: %s", request.method, request.url.path, exc.detail)
        detail = exc.public_detail
    elif isinstance(exc, ProviderError):
        logger.error("Payment provider failure on %s: %s", request.url.path, exc.diagnostic)
    return _error_response(exc.status_code, detail, exc.error_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Schema failures share the ValidationError shape."""
    messages = [
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
        for err in exc.errors()
    ]
    return _error_response(ValidationError.status_code, "; ".join(messages), ValidationError.error_code)


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(profile_router)
app.include_router(config_router)
app.include_router(checkout_router)
app.include_router(payment_router)
app.include_router(admin_router)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def deep_health(db: Session = Depends(get_db)):
    """Detailed health check including dependency statuses."""
    db_ok = False
    configured = False
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
        configured = ConfigurationService.is_configured(db)
    except SQLAlchemyError as e:
        logger.error("Health check database query failed: %s", e)

    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        database="connected" if db_ok else "disconnected",
        stripe_configured=configured,
        version=settings.APP_VERSION,
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
    )
