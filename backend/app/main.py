"""
FastAPI entrypoint for Learnify backend application.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import AppError
from app.core.utils import format_error
from app.api.router import api_router
from app.db.session import Database, database, get_database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        database.connect()
    except SQLAlchemyError as exc:
        # Requests get 503 until a later lazy connect succeeds
        logger.error(f"Database connection failed at startup: {exc}")
    yield
    database.dispose()


app = FastAPI(
    title="Learnify API",
    description="Backend API for the Learnify tutoring marketplace",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else "Invalid request."
    return JSONResponse(status_code=400, content=format_error(f"Invalid input: {detail}"))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=format_error(str(exc.detail)))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content=format_error("Internal server error."))


# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Learnify API is running"}


@app.get("/health")
def health(store: Database = Depends(get_database)):
    """Health check endpoint reporting database readiness."""
    if not store.is_ready:
        try:
            store.connect()
        except SQLAlchemyError as exc:
            logger.warning(f"Health check could not reach the database: {exc}")
    return {
        "status": "healthy",
        "database": "connected" if store.is_ready else "unavailable",
    }
