from fastapi import FastAPI
from loguru import logger

from contribution_api.api.routes.contributions import router
from contribution_api.core.cache import TTLCache
from contribution_api.core.logger import setup_logger
from contribution_api.core.middleware import ContributionsRateLimitMiddleware
from contribution_api.core.middleware import log_requests
from contribution_api.core.observability import init_sentry
from contribution_api.settings import Settings


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the API application with its cache, middleware and routes."""

    settings = app_settings or Settings()
    setup_logger(settings.log_level)
    init_sentry(settings)

    app = FastAPI(title="GitHub Contributions API")
    app.state.settings = settings
    app.state.markup_cache = TTLCache[str](max_entries=settings.cache_max_entries)

    app.add_middleware(
        ContributionsRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.middleware("http")(log_requests)
    app.include_router(router)

    logger.info(
        f"Application initialized, default user {settings.default_username!r}, "
        f"cache ttl {settings.cache_ttl_seconds}s"
    )
    return app


app = create_app()
