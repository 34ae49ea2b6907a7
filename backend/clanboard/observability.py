"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire
from fastapi import FastAPI

from clanboard import __version__
from clanboard.config import Settings

logger = logging.getLogger(__name__)

_configured = False


def initialize_logfire(settings: Settings, app: FastAPI | None = None) -> None:
    """
    Initialize Logfire and bridge standard logging into it.

    Safe to call more than once; logfire itself is configured on the first
    call and later calls only instrument the given app.

    This function configures Logfire cloud tracking and instruments:
    - Python logging (bridges to Logfire)
    - FastAPI request handling, when an app is given
    - PyMongo commands issued by the Motor client

    Args:
        settings: Application settings containing Logfire token
        app: FastAPI application to instrument

    Returns:
        None. Logs success or warning messages.
    """
    global _configured

    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        if not _configured:
            logfire.configure(
                token=settings.logfire_token,
                service_name="clanboard",
                service_version=__version__,
                environment=settings.environment,
            )

            root_logger = logging.getLogger()
            root_logger.addHandler(logfire.LogfireLoggingHandler())

            try:
                logfire.instrument_pymongo()
            except Exception as instrument_error:
                logger.debug(f"PyMongo instrumentation skipped: {instrument_error}")

            _configured = True
            logger.info("Logfire cloud tracking initialized")

        if app is not None:
            logfire.instrument_fastapi(app)

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
