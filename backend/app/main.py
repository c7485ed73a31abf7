# backend/app/main.py

import logging
import os
import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from .api import api_quote, api_settings
from .core.config import collect_frontend_origins, settings
from .core.observability import setup_logging

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

_BOOT_TS = time.time()

app = FastAPI(title=settings.PROJECT_NAME, default_response_class=ORJSONResponse)


# ─── CORS middleware ─────────────────────────────────────────────────────────
ALLOWED_ORIGINS = collect_frontend_origins(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("CORS origins set to: %s", ALLOWED_ORIGINS)
app.add_middleware(GZipMiddleware, minimum_size=1024)


@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    """Return JSON responses for HTTP errors and log them."""
    try:
        response = await call_next(request)
    except StarletteHTTPException as exc:  # return the original status and detail
        logger.error(
            "HTTP error %s at %s: %s", exc.status_code, request.url.path, exc.detail
        )
        response = ORJSONResponse(
            status_code=exc.status_code, content={"detail": exc.detail}
        )
    except Exception as exc:  # pragma: no cover - generic handler
        logger.exception("Unhandled error: %s", exc)
        response = ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )

    # Ensure the CORS headers are present even when an exception occurs
    origin = request.headers.get("origin")
    if origin and ("*" in ALLOWED_ORIGINS or origin.rstrip("/") in ALLOWED_ORIGINS):
        response.headers["Access-Control-Allow-Origin"] = origin
        if "Vary" not in response.headers:
            response.headers["Vary"] = "Origin"

    return response


@app.get("/healthz", tags=["health"])
async def healthz():
    """Liveness check; the quote API holds no external connections."""
    return {
        "status": "ok",
        "uptime_s": round(time.time() - _BOOT_TS, 1),
        "pid": os.getpid(),
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = jsonable_encoder(exc.errors())
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


api_prefix = settings.API_V1_STR  # usually something like "/api/v1"

app.include_router(api_quote.router, prefix=f"{api_prefix}", tags=["quotes"])
app.include_router(api_settings.router, prefix=f"{api_prefix}", tags=["settings"])


# ─── A simple root check ─────────────────────────────────────────────────────
@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
