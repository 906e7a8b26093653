"""Structured logging configuration using structlog.

JSON lines in production, colored console output in development. Both
renderers share one processor chain, so stdlib loggers (uvicorn, httpx)
come out in the same shape as our own events.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Event fields that may carry credentials
SENSITIVE_KEYS = frozenset({"api_key", "authorization", "groq_api_key", "token"})
REDACTED = "***"

# Model output and raw subjects end up in events; keep lines bounded
MAX_FIELD_LENGTH = 500


def app_context(app_name: str, environment: str) -> Processor:
    """Build a processor that stamps every event with app and environment."""
    def _add(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", app_name)
        event_dict.setdefault("env", environment)
        return event_dict
    return _add


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-looking fields."""
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def truncate_long_values(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Cut string fields (other than the event itself) to MAX_FIELD_LENGTH."""
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > MAX_FIELD_LENGTH:
            event_dict[key] = f"{value[:MAX_FIELD_LENGTH]}...[{len(value)} chars]"
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    app_name: str = "subject-mailer",
) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        environment: "production" selects the JSON renderer
        app_name: Value of the ``app`` field on every event
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        app_context(app_name, environment),
        redact_secrets,
        truncate_long_values,
    ]

    renderer: Processor
    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        # stdlib records carry their fields in `extra`
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level_int)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    # The tracing middleware already logs one line per request
    quiet: dict[str, int] = {
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
        "asyncio": logging.WARNING,
        "uvicorn.access": logging.WARNING,
    }
    for name, level in quiet.items():
        logging.getLogger(name).setLevel(level)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
