"""
Structured logging helpers for mapping runs.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "WARNING", *, verbose: bool = False) -> None:
    """
    Configure root logging to stderr so stdout stays free for CSV output.
    """

    resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        format=_LOG_FORMAT,
        level=resolved,
        stream=sys.stderr,
        force=True,
    )
    # urllib3 is chatty at DEBUG and repeats what the connector already logs.
    logging.getLogger("urllib3").setLevel(max(resolved, logging.INFO))


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
