import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Configure the cafedocs logger hierarchy"""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "cafedocs": {"handlers": ["console"], "level": level.upper(), "propagate": False},
        },
    })
