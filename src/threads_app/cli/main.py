# src/threads_app/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds a session, runs the console front end on the
asyncio event loop and tears the session down (cancelling whatever is still
in flight) on exit.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_session, shutdown_session
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_session(settings)
    try:
        await run_console_loop(state)
    finally:
        await shutdown_session(state)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
