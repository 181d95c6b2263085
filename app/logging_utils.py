"""
Logging helpers shared by the batch pipeline and the dashboard.
"""

from __future__ import annotations

import json
import logging
from typing import Any

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once per process.

    Later calls only adjust the root level.
    """

    global _configured

    resolved = getattr(logging, level.strip().upper(), logging.INFO)
    if _configured:
        logging.getLogger().setLevel(resolved)
        return

    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    _configured = True


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
