import logging
from logging.config import dictConfig

_configured = False


def setup_logging(level: str = "INFO") -> None:
    global _configured
    if _configured:
        return

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "plain"},
            },
            "loggers": {
                "docman": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            },
        }
    )
    _configured = True
    logging.getLogger("docman").debug("logging configured at %s", level.upper())
