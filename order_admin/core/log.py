from __future__ import annotations

import logging
import sys, json
import time, uuid
from fastapi import Request, Response
from uvicorn.logging import ColourizedFormatter
from order_admin.core.config import settings


_RESERVED_ATTRS = (
    "message", "args", "levelname", "levelno", "name", "msg", "pathname", "filename",
    "module", "lineno", "funcName", "exc_info", "exc_text", "stack_info", "created",
    "msecs", "relativeCreated", "thread", "threadName", "processName", "process",
    "taskName",
)


class _RequestIdLogFilter(logging.Filter):
    """Injecte le request_id dans tous les logs d'une requête."""

    def filter(self, record: logging.LogRecord) -> bool:
        # request_id est ajouté par le middleware access
        record.request_id = getattr(record, "request_id", "-")  # type: ignore
        return True


class _JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname.upper(),
            "logger": record.name,
            "msg": record.getMessage(),
            "service": getattr(settings, "APP_NAME", "order-admin"),
            "request_id": getattr(record, "request_id", "-"),
        }

        # Merge extras (method, path, status, latency_ms, order_id, etc.)
        for k, v in record.__dict__.items():
            if k not in log_obj and k not in _RESERVED_ATTRS:
                log_obj[k] = v

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def setup_logging():
    """Configure le logging pour l'application."""
    log_level = settings.LOG_LEVEL.upper()
    log_format = settings.LOG_FORMAT.lower()

    handler = logging.StreamHandler(sys.stdout)

    if log_format == "json":
        formatter = _JsonLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z")
    else:
        formatter = ColourizedFormatter("%(levelprefix)s %(name)s - %(message)s", use_colors=True)

    handler.setFormatter(formatter)
    handler.addFilter(_RequestIdLogFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)

    # Moins de bruit
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def access_log_middleware(request: Request, call_next) -> Response:
    """Middleware pour logguer les requêtes et réponses avec un request_id."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger = logging.getLogger("order_admin.access")
    extra = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "-",
        "user_agent": request.headers.get("user-agent", "-"),
    }

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 2)

    extra["status"] = response.status_code
    extra["latency_ms"] = duration_ms

    logger.info("request", extra=extra)

    return response
