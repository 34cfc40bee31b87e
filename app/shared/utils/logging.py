# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# The garden's diary for operators. Every line says which request and which user's plant it
# is about, so one plant's growth, wilting and rewards can be followed from start to finish.

# 🧪 Purpose (Technical Summary):
# Structured logging on the standard logging package. Request, user and correlation ids travel
# in ContextVars and are stamped onto records by a logging.Filter; records render as text or
# JSON lines depending on LOG_FORMAT. Also provides helpers for HTTP timing, plant business
# events and service lifecycle/health records.

# 🔗 Dependencies:
# - logging, contextvars (stdlib)
# - app.shared.config.settings (LOG_LEVEL, LOG_FORMAT)

# 🔄 Connected Modules / Calls From:
# Used by: app.main startup/shutdown, request logging middleware, plant command handlers,
# health sweep task, health endpoint

import json
import logging
import socket
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional
from uuid import uuid4

from app.shared.config.settings import get_settings

SERVICE_NAME = 'mindful-garden-api'

_CONTEXT_FIELDS = ('request_id', 'user_id', 'correlation_id')
_context_vars: Dict[str, ContextVar] = {
    name: ContextVar(name, default='') for name in _CONTEXT_FIELDS
}

# Keyword arguments the stdlib logger understands itself
_LOGGING_KWARGS = ('exc_info', 'stack_info', 'stacklevel')

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


def current_context() -> Dict[str, str]:
    """Context ids set by the innermost ``log_context``; unset ids are ''."""
    return {name: var.get() for name, var in _context_vars.items()}


class ContextFilter(logging.Filter):
    """Stamps the current context ids and the service name onto every record."""

    def __init__(self):
        super().__init__()
        self.hostname = socket.gethostname()

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in current_context().items():
            setattr(record, name, value)
        record.service = SERVICE_NAME
        record.hostname = self.hostname
        if not hasattr(record, 'extra_fields'):
            record.extra_fields = {}
        return True


class TextFormatter(logging.Formatter):
    """
    One human-readable line per record.

    Extra fields are appended as ``key=value`` pairs after the message.
    """

    def __init__(self):
        super().__init__(
            '%(asctime)s %(levelname)-7s %(name)s [%(request_id)s|%(user_id)s] %(message)s'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = getattr(record, 'extra_fields', None)
        if extra:
            pairs = ' '.join(f'{key}={value}' for key, value in extra.items())
            line = f'{line} | {pairs}'
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'service': getattr(record, 'service', SERVICE_NAME),
            'hostname': getattr(record, 'hostname', None),
        }

        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, '')
            if value:
                entry[name] = value

        extra = getattr(record, 'extra_fields', None)
        if extra:
            entry['extra'] = extra

        if record.exc_info:
            entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str, ensure_ascii=False)


class PerformanceLogger:
    """Request timing records for the HTTP layer."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        extra: Dict = None
    ):
        fields = {
            'event_type': 'http_request',
            'method': method,
            'path': path,
            'status_code': status_code,
            'duration_ms': round(duration_ms, 2),
            **(extra or {})
        }
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{method} {path} -> {status_code} in {duration_ms:.2f}ms",
            extra={'extra_fields': fields}
        )


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger.

    Keyword arguments to the level methods become extra fields, so
    ``logger.info("saved", version=3)`` carries ``version`` into the
    JSON output.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def log(self, level: int, message: str, extra: Dict = None, **kwargs):
        self._log(level, message, extra, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        if not self.logger.isEnabledFor(level):
            return

        std_kwargs = {k: kwargs.pop(k) for k in _LOGGING_KWARGS if k in kwargs}
        fields = {**(extra or {}), **kwargs}
        if fields:
            std_kwargs['extra'] = {'extra_fields': fields}

        self.logger.log(level, message, **std_kwargs)

    def log_business_event(
        self,
        event_type: str,
        description: str,
        entity_id: str = None,
        entity_type: str = None,
        extra: Dict = None
    ):
        """Plant lifecycle record (initialized, stage change, rewards, wilting, sweep)."""
        fields = {
            'event_type': 'business_event',
            'business_event_type': event_type,
            **(extra or {})
        }
        if entity_id:
            fields['entity_id'] = entity_id
        if entity_type:
            fields['entity_type'] = entity_type

        self.info(description, extra=fields)


def setup_logging(log_level: str = None, log_format: str = None) -> logging.Logger:
    """
    Configure the root logger once per process.

    Later calls are no-ops. Arguments default to LOG_LEVEL and LOG_FORMAT
    from settings.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    formatter = JSONFormatter() if (log_format or settings.LOG_FORMAT) == 'json' else TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Quieten chatty libraries
    for noisy in ('sqlalchemy.engine', 'asyncio', 'celery.app.trace'):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    logger = _loggers_cache.get(name)
    if logger is None:
        logger = _loggers_cache[name] = StructuredLogger(name)
    return logger


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> Iterator[Dict[str, str]]:
    """
    Bind context ids for every record logged inside the block.

    Ids left as None inherit the enclosing context, so a handler can add
    ``user_id`` inside a request without losing the request id. A request
    id is generated when none is set at all.
    """
    outer = current_context()
    values = {
        'request_id': request_id or outer['request_id'] or str(uuid4()),
        'user_id': user_id or outer['user_id'],
        'correlation_id': correlation_id or outer['correlation_id'],
    }
    tokens = [(_context_vars[name], _context_vars[name].set(value)) for name, value in values.items()]

    try:
        yield values
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def log_startup_event(service_name: str, version: str, extra: Dict = None):
    get_logger('startup').info(
        f"Service {service_name} {version} starting up",
        extra={'event_type': 'service_startup', 'service_name': service_name, 'version': version, **(extra or {})}
    )


def log_shutdown_event(service_name: str, extra: Dict = None):
    get_logger('shutdown').info(
        f"Service {service_name} shutting down",
        extra={'event_type': 'service_shutdown', 'service_name': service_name, **(extra or {})}
    )


def log_health_check(component: str, status: str, extra: Dict = None):
    level = logging.INFO if status == 'healthy' else logging.WARNING
    get_logger('health').log(
        level,
        f"Health check for {component}: {status}",
        extra={'event_type': 'health_check', 'component': component, 'status': status, **(extra or {})}
    )
