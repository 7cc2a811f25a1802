import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure console logging for the herdfeed package.

    Safe to call more than once; the handler is only attached the first time.
    """
    logger = logging.getLogger("herdfeed")
    logger.setLevel(level)

    if not any(getattr(h, "_herdfeed", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._herdfeed = True
        logger.addHandler(handler)

    return logger
