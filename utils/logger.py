import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str):
    logger = logging.getLogger(name)

    # Avoid duplicate handlers (Uvicorn already adds one)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    # LOG_LEVEL wins, otherwise inherit Uvicorn's level
    level = os.getenv("LOG_LEVEL")
    if level:
        logger.setLevel(level.upper())
    else:
        logger.setLevel(logging.getLogger("uvicorn").level or logging.INFO)

    # Prevent double propagation to root handler
    logger.propagate = False

    return logger
