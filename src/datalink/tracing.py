"""Optional tracing hooks.

Every codec entry point accepts ``logger=`` and passes it down. Nothing is
emitted when no logger is supplied; the package never installs handlers or
relies on a module-level logger.
"""

from __future__ import annotations

import logging
from typing import Optional

TraceLogger = Optional[logging.Logger]


def trace(logger: TraceLogger, msg: str, *args: object) -> None:
    """Emit a DEBUG record if a logger was supplied."""
    if logger is not None:
        logger.debug(msg, *args)


def warn(logger: TraceLogger, msg: str, *args: object) -> None:
    """Emit a WARNING record if a logger was supplied."""
    if logger is not None:
        logger.warning(msg, *args)
