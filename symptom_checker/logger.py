"""
Logging setup shared by every module under symptom_checker.
"""
import logging
import sys

LOGGER_NAME = "symptom_checker"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the package logger once and set its level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | [%(name)s] | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger
