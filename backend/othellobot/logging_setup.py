from __future__ import annotations

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging to stderr once per process."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_othellobot_logging_configured", False):
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    fmt = "%(asctime)s.%(msecs)03d %(levelname)s [%(process)d:%(threadName)s] %(name)s - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    root_logger._othellobot_logging_configured = True  # type: ignore[attr-defined]

    # Capture warnings through logging
    logging.captureWarnings(True)
