"""Structured logging configuration using structlog."""

import logging
import re
import sys

import structlog

# Patterns to redact from log output
_REDACT_PATTERNS = [
    # GitHub tokens: classic (ghp_, gho_, ...) and fine-grained (github_pat_)
    (re.compile(r"(gh[pousr]_[a-zA-Z0-9]{4})[a-zA-Z0-9]{16,}"), r"\1...REDACTED"),
    (re.compile(r"(github_pat_[a-zA-Z0-9]{4})[a-zA-Z0-9_]{16,}"), r"\1...REDACTED"),
    # Authorization headers
    (re.compile(r"((?:token|Bearer)\s+)[a-zA-Z0-9_.-]{16,}"), r"\1REDACTED"),
    # Stack Exchange keys and tokens in query strings / key=value
    (re.compile(r"((?:key|access_token|api[_-]?key)['\"]?\s*[:=]\s*['\"]?)[a-zA-Z0-9_()*.-]{8,}"), r"\1REDACTED"),
]


def redact(value: str) -> str:
    for pattern, replacement in _REDACT_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _redact_sensitive(_, __, event_dict: dict) -> dict:
    """Structlog processor to redact provider credentials from log output."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact(value)
    return event_dict


# Third-party loggers that are chatty at INFO; httpx logs full request URLs
_QUIET_LOGGERS = ("httpx", "apscheduler")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive,
    ]


def setup_logging(json_mode: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        json_mode: JSON lines (API server, log shipping) instead of the
                   console renderer used by the CLI.
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer()
    # foreign_pre_chain gives uvicorn / tenacity records the same fields and redaction
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
