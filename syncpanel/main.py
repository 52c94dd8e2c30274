"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from syncpanel.config import settings
from syncpanel.database import init_db
from syncpanel.logging_config import setup_logging, get_logger
from syncpanel.middleware.logging_middleware import LoggingMiddleware
from syncpanel.routes import health, mailchimp, notifications
from syncpanel.routes import settings as settings_routes
from syncpanel.services.seed_settings import seed_default_settings
from syncpanel.utils import error_response


logger = get_logger("syncpanel.main")


def _run_startup() -> None:
    """Create tables and seed default settings."""
    init_db()
    logger.info("Database initialized")
    seed_default_settings()
    logger.info("Default settings seeded")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting %s", settings.app_name)
    _run_startup()
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(p) for p in first.get("loc", ()))
    message = f"{location}: {first.get('msg', 'Invalid request')}" if location else "Invalid request"
    return error_response(422, "ValidationError", message)


app.include_router(health.router, prefix=settings.api_v1_prefix)
app.include_router(settings_routes.router, prefix=settings.api_v1_prefix)
app.include_router(mailchimp.router, prefix=settings.api_v1_prefix)
app.include_router(notifications.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "docs": "/docs"}
