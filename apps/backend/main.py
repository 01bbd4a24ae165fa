from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import os
import logging
import traceback

from app.config import Capabilities, get_env_presence
from app.crawl import router as crawl_router
from app.rate_limit import limiter
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    joblens_env = os.getenv("JOBLENS_ENV", "production").lower()
    if joblens_env == "dev":
        logger.info("[joblens] env: JOBLENS_ENV=dev (detailed errors enabled)")
    else:
        logger.info(f"[joblens] env: JOBLENS_ENV={joblens_env}")

    status = Capabilities.get_status()
    logger.info(f"[joblens] boards: {status['components']['boards']}, headless={status['components']['headless']}")
    if not status['components']['delays']:
        logger.warning("[joblens] Navigation delays disabled (JOBLENS_DISABLE_DELAYS=true)")

    yield


app = FastAPI(title="JobLens API", version="0.1.0", lifespan=lifespan)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Error masking middleware
@app.middleware("http")
async def error_masking_middleware(request: Request, call_next):
    """Mask detailed errors in production; show full errors in dev."""
    try:
        response = await call_next(request)
        return response
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[api] Unhandled error on {request.method} {request.url.path}: {e}")

        content = {"status": "error", "error": "An internal error occurred. Please try again later."}
        if os.getenv("JOBLENS_ENV", "").lower() == "dev":
            details = traceback.format_exc()
            logger.error(details)
            content.update(error=str(e), traceback=details)
        return JSONResponse(status_code=500, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("JOBLENS_CORS_ORIGINS", "http://localhost:3000,http://localhost:5000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(crawl_router)


@app.get("/api/healthz")
async def healthz():
    return Capabilities.get_status()


@app.get("/admin/config/env")
async def config_env():
    if os.getenv("JOBLENS_ENV", "").lower() != "dev":
        raise HTTPException(status_code=403, detail="Only available in dev mode")
    return get_env_presence()
