from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_object_gateway_handler"


class SuppressHealthCheckAccessLog(logging.Filter):
    """Drop uvicorn access lines for ``/health`` probes."""

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2])
            if path == "/health" or path.startswith("/health?"):
                return False
        return True


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)

    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, SuppressHealthCheckAccessLog) for f in access_logger.filters):
        access_logger.addFilter(SuppressHealthCheckAccessLog())

    # botocore logs every credential lookup at INFO.
    logging.getLogger("botocore").setLevel(max(logging.WARNING, root.level))
