import logging

_LOGGER_NAME = "namedsql"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger (once) and set its level."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not any(getattr(h, "_namedsql", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._namedsql = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
