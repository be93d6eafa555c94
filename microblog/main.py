"""Microblog API - FastAPI application."""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from microblog import __version__
from microblog.api.api import api_router
from microblog.core.config import Settings, settings
from microblog.core.exceptions import AuthError, InternalError, MicroblogError, NotFoundError
from microblog.db.session import Database
from microblog.middleware.logging import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    database = Database(app_settings.DATABASE_URL, echo=app_settings.DEBUG)
    app.state.db = database
    try:
        await database.ping()
        logger.info("Database: OK")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database connection failed: %s", e)
    if app_settings.CREATE_TABLES_ON_STARTUP:
        await database.create_all()
    logger.info("Running on http://%s:%s | API: /api | Docs: /docs", app_settings.HOST, app_settings.PORT)
    try:
        yield
    finally:
        await database.dispose()
        logger.info("Database engine disposed")


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _path_resource(exc: RequestValidationError) -> str | None:
    """Resource named by a malformed path id (post_id -> "Post"), if that is the only problem."""
    errors = exc.errors()
    if not errors or any(err["loc"][0] != "path" for err in errors):
        return None
    name = str(errors[0]["loc"][-1])
    return name.removesuffix("_id").capitalize()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    if not errors:
        return "Invalid request"
    err = errors[0]
    if err.get("type") == "json_invalid":
        return "Invalid JSON body"
    return f"Invalid {err['loc'][-1]}: {err['msg']}"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"error": message}; stack traces are only logged."""

    @app.exception_handler(MicroblogError)
    async def handle_app_error(request: Request, exc: MicroblogError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.context)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # An id that cannot name a row is reported like any other missing row
        resource = _path_resource(exc)
        if resource:
            return await handle_app_error(request, NotFoundError(resource))
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return await handle_app_error(request, InternalError("Database error", context={"error": type(exc).__name__}))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = app_settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "microblog.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
