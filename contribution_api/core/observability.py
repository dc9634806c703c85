import sentry_sdk
from loguru import logger

from contribution_api.settings import Settings


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured."""

    if not app_settings.sentry_dsn:
        logger.debug("SENTRY_DSN not set, error reporting disabled")
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    logger.info(f"Sentry initialized for environment={app_settings.environment}")


def report_exception(exc: BaseException) -> None:
    """Send a handled exception to Sentry; a no-op when Sentry is not initialized."""

    sentry_sdk.capture_exception(exc)
