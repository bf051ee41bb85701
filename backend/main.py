import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.exceptions import VerificationError
from app.middleware import RequestSizeLimitMiddleware, limiter
from app.routes import face, health, push, scan
from app.services.http import close_http_client
from app.services.records import close_client as close_records_client

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"EPWD backend starting (jurisdiction: {settings.jurisdiction_keyword})")
    yield
    # Shutdown - release provider clients
    await close_http_client()
    await close_records_client()


app = FastAPI(
    title="EPWD API",
    description="PWD ID scanning and identity verification",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiter state (required by slowapi)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError):
    logger.warning(
        f"{request.method} {request.url.path} failed: {exc.message}",
        extra={"category": exc.category, "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error"},
    )


# Request size limit middleware (base64 photos)
app.add_middleware(RequestSizeLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.root_router, tags=["health"])
app.include_router(health.router, prefix="/api/health", tags=["health"])
app.include_router(scan.router, prefix="/api", tags=["scan"])
app.include_router(face.router, prefix="/api", tags=["face"])
app.include_router(push.router, prefix="/api", tags=["push"])
