"""
Logging Configuration and Utilities

Two channels share one set of handlers:

- ``get_logger`` returns a stdlib logger adapter; ``extra`` fields land in the
  JSON record produced by python-json-logger.
- ``get_structured_logger`` returns a structlog logger for event-style
  records (access log), rendered by the structlog processor chain below.

Guest contact data (email, phone, identity document) is masked in both.
"""

import sys
import logging
import logging.handlers
import re
from typing import Any, Dict, MutableMapping, Optional, Tuple
from datetime import datetime, timezone
from pathlib import Path
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

from hotel_backoffice.config.settings import settings

PACKAGE_LOGGER = 'hotel_backoffice'

# Set per request by RequestIDMiddleware
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

REDACTED_KEYS = ('password', 'token', 'secret', 'authorization', 'cookie')
GUEST_CONTACT_KEYS = ('email', 'phone', 'id_number')

_EMAIL_RE = re.compile(r'^(?P<head>[^@])[^@]*(?P<domain>@.+)$')


def mask_guest_value(key: str, value: Any) -> Any:
    """
    Mask one field value according to its key.

    Credentials are dropped entirely. Guest contact fields keep just enough
    to be recognisable at the front desk: the first letter and domain of an
    email, the last four characters of a phone or document number.
    """
    lowered = key.lower()
    if any(marker in lowered for marker in REDACTED_KEYS):
        return '[REDACTED]'
    if not isinstance(value, str) or not any(marker in lowered for marker in GUEST_CONTACT_KEYS):
        return value

    match = _EMAIL_RE.match(value)
    if 'email' in lowered and match:
        return f"{match.group('head')}***{match.group('domain')}"
    if len(value) <= 4:
        return '***'
    return '*' * (len(value) - 4) + value[-4:]


def mask_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    masked = {}
    for key, value in fields.items():
        if isinstance(value, dict):
            masked[key] = mask_fields(value)
        else:
            masked[key] = mask_guest_value(key, value)
    return masked


def add_request_context(logger, method_name, event_dict):
    """structlog processor: stamp request id, service and environment"""
    req_id = request_id.get()
    if req_id:
        event_dict.setdefault('request_id', req_id)
    event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
    event_dict['service'] = settings.APP_NAME
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


def mask_guest_data(logger, method_name, event_dict):
    """structlog processor: apply guest data masking to every field"""
    return mask_fields(event_dict)


class HotelJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding source location, request id and masking"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"

        req_id = request_id.get()
        if req_id and 'request_id' not in log_record:
            log_record['request_id'] = req_id

        masked = mask_fields(dict(log_record))
        log_record.clear()
        log_record.update(masked)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        renderer = (
            structlog.processors.JSONRenderer()
            if settings.LOG_FORMAT == 'json'
            else structlog.processors.KeyValueRenderer(key_order=['event', 'request_id'])
        )
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                add_request_context,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.format_exc_info,
                mask_guest_data,
                renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def build_formatter() -> logging.Formatter:
        if settings.LOG_FORMAT == 'json':
            return HotelJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    @staticmethod
    def configure_standard_logging():
        level = getattr(logging, settings.LOG_LEVEL)
        formatter = LoggingConfig.build_formatter()

        handlers = [logging.StreamHandler(sys.stdout)]
        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.TimedRotatingFileHandler(
                    log_path,
                    when='midnight',
                    backupCount=settings.LOG_RETENTION,
                )
            )

        # Only the package logger is owned here; the root logger is left to
        # the hosting process (uvicorn, pytest).
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            package_logger.addHandler(handler)

        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
        logging.getLogger('sqlalchemy.engine').setLevel(
            logging.INFO if settings.LOG_SQL_QUERIES else logging.WARNING
        )


class ContextLoggerAdapter(logging.LoggerAdapter):
    """Adapter merging bound context with per-call ``extra`` fields"""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs['extra'] = {**(self.extra or {}), **(kwargs.get('extra') or {})}
        return msg, kwargs


def get_logger(name: Optional[str] = None, **context: Any) -> ContextLoggerAdapter:
    """
    Get a logger under the package namespace.

    Args:
        name: Logger name (defaults to the package logger)
        **context: Fields attached to every record of this adapter

    Returns:
        Logger adapter
    """
    name = name or PACKAGE_LOGGER
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return ContextLoggerAdapter(logging.getLogger(name), context)


def get_structured_logger(name: Optional[str] = None):
    """structlog logger for event-style records (key/value fields instead of a message)"""
    return structlog.get_logger(name or PACKAGE_LOGGER)


def setup_logging():
    """Initialize logging configuration"""
    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()

    LoggingConfig.configure_standard_logging()

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
        'structured_logging': settings.ENABLE_STRUCTURED_LOGGING,
    })


__all__ = [
    'get_logger',
    'get_structured_logger',
    'mask_guest_value',
    'setup_logging',
    'ContextLoggerAdapter',
    'LoggingConfig',
    'request_id',
]
