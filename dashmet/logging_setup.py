"""Logging configuration for applications embedding dashmet."""

import logging
import sys
from dataclasses import dataclass
from logging import Logger
from typing import Dict, Optional, Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class LoggerConfig:
    level: Union[int, str] = logging.INFO
    fmt: str = DEFAULT_FORMAT


def configure_logging(config: Optional[LoggerConfig] = None) -> Dict[str, Logger]:
    """Install a stdout handler once and return the package loggers by role."""
    config = config or LoggerConfig()
    logging.basicConfig(
        level=config.level,
        format=config.fmt,
        stream=sys.stdout,
    )
    logging.debug("Logging initialized with level %s", config.level)
    return {
        "dashmet": logging.getLogger("dashmet"),
        "fetch": logging.getLogger("dashmet.adapters.httpx_fetcher"),
        "sources": logging.getLogger("dashmet.sources.base"),
        "service": logging.getLogger("dashmet.service"),
    }
