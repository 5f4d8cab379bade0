"""
Debug logging for TOKSCAN.

All modules log through `LOG`, which writes to stderr via a loguru logger
bound to the "TOKSCAN" app. Output stops as soon as `beQuiet` is set in the
application settings, which are looked up on every call so that a changed
environment is honoured.

Example:
    from tokscan.lib.log import LOG
    LOG("Rendered 3 files.")

Environment:
- `TOKSCAN_BEQUIET=True` silences the log.
"""

from loguru import logger
from typing import Any
import sys

# Logger bound to this app, writing only to stderr
app_logger = logger.bind(app="TOKSCAN")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Emit a debug record attributed to the caller, unless quiet.

    :param args: Message and loguru formatting arguments.
    :param kwargs: Extra loguru formatting arguments.
    """
    try:
        from tokscan.config.settings import appsettings  # Ensure up-to-date settings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}", file=sys.stderr)
