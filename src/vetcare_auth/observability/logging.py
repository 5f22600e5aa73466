"""
vetcare_auth.observability.logging

structlog setup for the auth layer.

Responsibilities:
- Render one JSON event per line, enriched with request/principal contextvars.
- Mask credential-bearing keys before anything is rendered.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog

REDACTED = "[redacted]"

# Compared case-insensitively against top-level event keys and nested mapping keys.
SENSITIVE_KEYS = frozenset(
    {"authorization", "token", "access_token", "raw_token", "jwt", "password", "secret", "jwt_secret"}
)


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _bind_service(service_name),
            redact_credentials,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _bind_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_credentials(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    structlog processor: replace values under credential keys (e.g. a logged
    `headers` mapping carrying `Authorization`) with a fixed marker.
    """
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, Mapping):
            event_dict[key] = _redact_mapping(value)
    return event_dict


def _redact_mapping(value: Mapping[Any, Any]) -> dict[Any, Any]:
    out: dict[Any, Any] = {}
    for k, v in value.items():
        if isinstance(k, str) and k.lower() in SENSITIVE_KEYS:
            out[k] = REDACTED
        elif isinstance(v, Mapping):
            out[k] = _redact_mapping(v)
        else:
            out[k] = v
    return out


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Auth events log `principal_id`/`source` as explicit keys and never token contents;
# the redaction processor is the backstop for anything that slips through.
