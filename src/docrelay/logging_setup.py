from __future__ import annotations

import json
import logging
import logging.config
import os

_STANDARD_LOGRECORD_ATTRS = {
    "name",
    "msg",
    "message",
    "asctime",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "color_message",
}


class _FileIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "file_id", None) in (None, ""):
            record.file_id = "-"
        return True


class _JsonExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extract_extras(record)
        if not extras:
            return base
        extras_json = json.dumps(extras, default=str, sort_keys=True)
        return f"{base} {extras_json}"


def _extract_extras(record: logging.LogRecord) -> dict[str, object]:
    extras: dict[str, object] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOGRECORD_ATTRS or key == "file_id":
            continue
        extras[key] = value
    return extras


def _install_file_id_filter() -> None:
    root = logging.getLogger()
    for handler in root.handlers:
        if any(isinstance(f, _FileIdFilter) for f in handler.filters):
            continue
        handler.addFilter(_FileIdFilter())


def configure_logging(*, log_level: str = "INFO") -> None:
    """Configure root logging with a consistent format.

    Each record carries the `file_id` it concerns (or `-`), so one reference
    can be followed from upload through later stream requests.
    """
    console_level_name = str(log_level).upper()
    default_console_fmt = "%(asctime)s %(levelname)s [%(file_id)s] %(name)s:%(lineno)d %(message)s"
    console_fmt = os.getenv("CONSOLE_LOG_FORMAT", default_console_fmt)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "()": "docrelay.logging_setup._JsonExtraFormatter",
                    "format": console_fmt,
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": console_level_name,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {"level": "DEBUG", "handlers": ["console"]},
        }
    )

    _install_file_id_filter()
    logging.captureWarnings(True)

    # Reduce noisy third-party request logs by default.
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
