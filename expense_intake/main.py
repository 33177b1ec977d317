import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.seed import build_store
from .db.store import ExpenseStore
from .routers import health, expenses


def create_app(
    settings_override: Settings | None = None, store: ExpenseStore | None = None
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    store: inject a prebuilt store; otherwise a fresh one is built from
    settings, so every app instance owns its own records.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug, json_logs=settings.json_logs)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(errors.ExpenseError, errors.expense_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(expenses.router, prefix=settings.api_prefix)
    # path -> methods served there; used to build the Allow header on 405
    app.state.allowed_methods = {
        settings.api_prefix + expenses.router.prefix: expenses.ALLOWED_METHODS,
    }

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    return app


app = create_app()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    uvicorn.run(
        "expense_intake.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
