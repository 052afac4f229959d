import sys
from logging.config import dictConfig

from app.core.config import APP_ENV

LOG_LEVEL = "DEBUG" if APP_ENV == "development" else "INFO"

APP_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# fields supplied by request_logging_middleware through `extra`
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(request_id)s | %(client_addr)s | "
    "%(method)s %(path)s | %(status_code)s | %(process_time_ms)sms | "
    "tenant=%(tenant_id)s user=%(user_id)s"
)

# libraries that are too chatty below WARNING
QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine", "aiosqlite", "asyncio")


def _stdout_handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def setup_logging():
    loggers = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    loggers["access"] = {
        "handlers": ["access_console"],
        "level": "INFO",
        "propagate": False,
    }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": APP_FORMAT},
                "access": {"format": ACCESS_FORMAT},
            },
            "handlers": {
                "console": _stdout_handler("default"),
                "access_console": _stdout_handler("access"),
            },
            "loggers": loggers,
            "root": {"level": LOG_LEVEL, "handlers": ["console"]},
        }
    )
