import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.core.config import settings
from jobboard.core.errors import AccountError, InternalError
from jobboard.db.base import Base
from jobboard.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from jobboard.models import Account  # noqa: F401

# Import API router
from jobboard.api.api import api_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    if settings.ACCOUNT_STORE == "sql":
        Base.metadata.create_all(bind=engine)
    logger.info("%s started with %s account store", settings.APP_NAME, settings.ACCOUNT_STORE)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board accounts: registration and authentication",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# ============== Error Handlers ==============


def error_key(request: Request) -> str:
    """The web registration API answers with "error", the auth service with "msg"."""
    return "error" if request.url.path.startswith("/api/") else "msg"


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError):
    return JSONResponse(
        status_code=exc.status_code,
        content={error_key(request): exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected payload on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={error_key(request): "Invalid request body"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=InternalError.status_code,
        content={error_key(request): InternalError.default_message},
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(api_router)


if __name__ == "__main__":
    uvicorn.run("jobboard.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
