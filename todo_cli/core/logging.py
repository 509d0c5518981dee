"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__));
configure_logfire() routes those records into Logfire.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Task added", task_id=1, priority="high")
"""

import logging

import logfire

from todo_cli.core.config import constants, get_settings


def configure_logfire(*, verbose: bool = False) -> None:
    """Configure Pydantic Logfire and attach it to standard logging.

    Nothing leaves the machine unless a Logfire token is configured. Console
    output is only enabled in verbose mode so regular command output stays clean.
    """
    current = get_settings()
    logfire.configure(
        token=current.logfire_token,
        service_name=constants.APP_NAME,
        service_version=constants.APP_VERSION,
        environment=current.environment,
        send_to_logfire="if-token-present",
        console=logfire.ConsoleOptions(min_log_level="debug") if verbose else False,
    )

    level = logging.DEBUG if verbose else current.log_level.upper()
    logging.basicConfig(level=level, handlers=[logfire.LogfireLoggingHandler()], force=True)

    logger = logging.getLogger(__name__)
    logger.debug("Logfire configured (verbose=%s)", verbose)


def span(name: str, **attributes: object) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("task_manager.add_task"):
            # Your service logic here
            pass
    """
    return logfire.span(name, **attributes)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, path, operation, etc.)

    Usage:
        log_with_context(logger, "info", "Task completed", task_id=3)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
