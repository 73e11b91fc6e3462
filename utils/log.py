import logging

_INITIALIZED = False

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(log_level: str = "WARNING") -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return

    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    _INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
