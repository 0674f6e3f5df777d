"""
Calculation Logging Module

One JSON object per line for every calculation the engine accepts or
rejects. The engine logs under ENGINE_LOGGER with the action
CALCULATE_ACTION; the record's resource is the convention label on
success and the raw method token on rejection.

Keys carried in the "extra" object:

    days          day count of an accepted calculation (DEBUG)
    anticipative  whether the anticipative transform ran (DEBUG)
    error_code    numeric error code of a rejection, e.g. 52006 (WARNING)
    error         error code name, e.g. INVALID_DATE_ORDER (WARNING)

Amounts are never logged.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


ROOT_LOGGER = "interest_calculator"
ENGINE_LOGGER = "interest_calculator.engine"
CALCULATE_ACTION = "calculate_interest"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a calculation record as a single JSON line"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, 'correlation_id', None),
            "action": getattr(record, 'action', None),
            "resource": getattr(record, 'resource', None),
            "extra": getattr(record, 'extra', None)
        }

        # Unset fields are left out of the line
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json",
                  logger_name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Attach a single stream handler to the package logger

    Rejections are logged at WARNING and accepted calculations at DEBUG,
    so INFO (the API default) reports failures only. The handler lives on
    the package logger and the engine logger propagates to it.

    Args:
        level: INTEREST_CALC_LOG_LEVEL value
        fmt: INTEREST_CALC_LOG_FORMAT value, "json" or "text"
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)

    # Re-running setup (one call per create_app) replaces the handler
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt.lower() == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None,
               extra: Optional[Dict[str, Any]] = None):
    """
    Emit a calculation record with its structured fields

    Nothing is built when the level is disabled, so the DEBUG success
    record costs nothing under the default configuration.

    Args:
        logger: Usually the ENGINE_LOGGER logger
        level: "debug", "warning", ...
        message: Human readable summary
        action: CALCULATE_ACTION for engine records
        resource: Convention label or raw method token
        correlation_id: Request identifier, generated by calculate() if absent
        extra: Keys listed in the module docstring
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    record = logger.makeRecord(
        logger.name, levelno, __name__, 0, message, (), None
    )

    if action:
        record.action = action
    if resource:
        record.resource = resource
    if correlation_id:
        record.correlation_id = correlation_id
    if extra:
        record.extra = extra

    logger.handle(record)
