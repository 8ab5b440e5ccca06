"""Logging setup for applications embedding wskcompose."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging with the standard wskcompose format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
