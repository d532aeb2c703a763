import logging
import re
from typing import Any, Dict

import structlog

# Keys whose values never reach the log output
SECRET_KEYS = {"authorization", "x-status-token", "api_token", "token", "password"}

_URL_PASSWORD = re.compile(r"(?P<scheme>[a-z][a-z0-9+.\-]*://)(?P<user>[^:/@\s]+):[^@\s]+@", re.IGNORECASE)
_BEARER = re.compile(r"Bearer\s+[A-Za-z0-9\-_.=:+/]+")


def _configure_stdlib_logging() -> None:
    logging.basicConfig(
        format="%(message)s",
        level=logging.INFO,
    )


def redact_value(value: str) -> str:
    """Mask bearer tokens and passwords embedded in connection URLs."""
    if "Bearer " in value:
        value = _BEARER.sub("Bearer [REDACTED]", value)
    if "@" in value and "://" in value:
        value = _URL_PASSWORD.sub(r"\g<scheme>\g<user>:[REDACTED]@", value)
    return value


def _redact_event(_logger, _name, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in list(event_dict.items()):
        if str(key).lower() in SECRET_KEYS:
            event_dict[key] = "[REDACTED]"
        elif isinstance(value, str):
            event_dict[key] = redact_value(value)
    return event_dict


def configure_structlog() -> None:
    _configure_stdlib_logging()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _redact_event,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
