import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from halal_bites.core.config import Settings

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> bool:
    """Initialize Sentry for error tracking"""
    if not settings.SENTRY_DSN:
        logger.warning("Sentry DSN not found - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=1.0 if not settings.is_production else 0.2,
        send_default_pii=False,
        environment=settings.ENVIRONMENT,
    )
    logger.info("Sentry initialized (%s)", settings.ENVIRONMENT)
    return True


def report_failure(exc: Exception, tag: str, kind: str) -> None:
    """Send a handled exception to Sentry, tagged so failure kinds can be told apart."""
    sentry_sdk.set_tag(tag, kind)
    sentry_sdk.capture_exception(exc)
