"""
Loguru setup. Called once by the API app and by the ingestion job.
"""
import sys

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=_FORMAT, level=level.upper())
