"""
FastAPI web application for the Order Stats Dashboard.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from web.config import LOG_JSON, LOG_LEVEL, ORDERS_API_URL, VERSION, WEB_HOST, WEB_PORT
from web.routes import api
from web.routes.api._deps import limiter
from web.middleware import RequestLoggingMiddleware
from core.config import validate_config, ConfigurationError
from core.observability import setup_logging, get_logger
from core.orders_api import close_client

# Use JSON format in production (LOG_FORMAT=json), human-readable otherwise
setup_logging(level=LOG_LEVEL, json_format=LOG_JSON)
logger = get_logger(__name__)

app = FastAPI(
    title="Order Stats Dashboard",
    description="Order history and revenue statistics with year/month filtering",
    version=VERSION,
)

# Add rate limiter to app state
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "detail": "Too many requests. Please try again later.",
            "retry_after": exc.detail
        }
    )


# Add request logging middleware (adds correlation IDs and timing)
app.add_middleware(RequestLoggingMiddleware)

# Add Gzip compression (min 500 bytes to compress)
app.add_middleware(GZipMiddleware, minimum_size=500)

app.include_router(api.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Order Stats Dashboard starting...")

    # Validate configuration early - fail fast with clear errors
    try:
        validate_config()
    except ConfigurationError as e:
        logger.critical(f"Configuration error: {e}")
        raise SystemExit(1)

    logger.info(f"Orders service: {ORDERS_API_URL}")


@app.on_event("shutdown")
async def shutdown_event():
    await close_client()
    logger.info("Order Stats Dashboard stopped")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("web.main:app", host=WEB_HOST, port=WEB_PORT)
