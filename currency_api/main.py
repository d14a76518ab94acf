import logging

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import convert, currencies, health
from .services.clock import utc_now
from .services.rates.catalog import load_rate_catalog


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp rate table). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug, json_output=settings.log_json)

    # The rate catalog is built once and shared read-only by every request
    try:
        catalog = load_rate_catalog(settings.rates_file, settings.anchor_currency)
    except errors.RateTableError:
        logging.getLogger("currency_api").exception("failed to load rate table on startup")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.rate_catalog = catalog
    app.state.started_at = utc_now()

    # Middleware: the last registered runs first, so request ids wrap the method guard
    app.middleware("http")(errors.method_guard_middleware)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(convert.router)
    app.include_router(currencies.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("currency_api.main:app", host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    run()
