"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.dependencies import get_gateway_config, get_settings
from src.api.endpoints.payments import payments_api
from src.checkout.validation import FormValidationError
from src.error_handler import ErrorHandler
from src.integrations.policy.response_wrappers import GatewayError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

error_handler = ErrorHandler()

# Initialize FastAPI app
app = FastAPI(
    title="Checkout Payment API",
    description="Checkout backend proxying mobile money and card charges to Flutterwave",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register payments API router
app.include_router(payments_api, prefix="/api", tags=["Payments"])


# ============================================================================
# ERROR HANDLERS
# ============================================================================
@app.exception_handler(FormValidationError)
async def form_validation_error_handler(request: Request, exc: FormValidationError):
    logger.info("Rejected %s: %s", request.url.path, exc.field_errors)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": exc.message, "errors": exc.field_errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"success": False, "message": "Invalid request body."})


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    logger.error("Gateway error on %s: %s (status=%s)", request.url.path, exc.message, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content=error_handler.not_found(request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    body = error_handler.handle_exception(
        exc,
        context={"path": request.url.path, "method": request.method},
        include_detail=get_settings().is_development,
    )
    return JSONResponse(status_code=500, content=body)


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Service description and endpoint index."""
    settings = get_settings()
    return {
        "status": "success",
        "message": f"{get_gateway_config().service_name} is running",
        "mode": "live" if settings.use_real_gateway() else "test",
        "endpoints": {
            "mobile_money": "/api/pay",
            "card_payment": "/api/card-pay",
            "mpesa_widget": "/api/mpesa-pay",
            "verify_transaction": "/api/transactions/{transaction_id}/verify",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe."""
    return {
        "status": "success",
        "message": "Server is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    config = get_gateway_config()
    logger.info("Starting Checkout Payment API...")
    logger.info(
        "Gateway: %s (mode=%s, timeout=%ss, key=%s)",
        config.gateway.base_url,
        "live" if settings.use_real_gateway() else "test",
        config.gateway.timeout_seconds,
        settings.masked_secret_key(),
    )
    if settings.use_real_gateway() and not settings.secret_key:
        logger.warning("SECRET_KEY not set; gateway calls will fail with 500 (set INTEGRATIONS_MODE=mock for local use)")
    if not settings.encryption_key:
        logger.warning("ENCRYPTION_KEY not set; card payments will fail")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Checkout Payment API...")
