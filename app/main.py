import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import engine
from app.core.exceptions import LedgerError
from app.core.logging import REQUEST_ID_HEADER, bind_request_context, configure_logging
from app.api.v1 import users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and release DB connections on shutdown"""
    configure_logging(app_env=settings.app_env)
    logger.info("Connection ledger starting up (env=%s)", settings.app_env)

    yield

    await engine.dispose()
    logger.info("Connection ledger shut down")


app = FastAPI(
    title="DevConnect Connection API",
    description="Swipe feed and mutual-connection ledger for a developer networking platform",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request"""
    request_id = bind_request_context(
        request.headers.get(REQUEST_ID_HEADER),
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Exception handlers
@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Map domain errors (auth, invalid id, not found, incomplete profile) to their status"""
    logger.info("Request rejected: %s (%s)", exc.message, type(exc).__name__)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Unexpected store failure"""
    logger.exception("Database error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Request failed"},
    )


# Include API routers
app.include_router(users.router, prefix="/api/v1/user", tags=["User Connections"])


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "DevConnect Connection API", "docs": "/docs"}
