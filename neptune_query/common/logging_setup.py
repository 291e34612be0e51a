"""Logging configuration for the command line and the server."""
from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'
SERVER_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level: Union[int, str] = logging.WARNING, with_timestamps: bool = False) -> None:
  """Install one stderr handler on the package logger."""
  if isinstance(level, str):
    level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
      level = logging.WARNING

  logger = logging.getLogger('neptune_query')
  for handler in list(logger.handlers):
    logger.removeHandler(handler)

  handler = logging.StreamHandler(sys.stderr)
  handler.setFormatter(logging.Formatter(SERVER_LOG_FORMAT if with_timestamps else LOG_FORMAT))
  logger.addHandler(handler)
  logger.setLevel(level)
  logger.propagate = False
