import logging

LOGGER_NAME = 'corpcov'
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the package logger reused across modules."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
