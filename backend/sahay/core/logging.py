from __future__ import annotations

import json
import logging
import sys
import time
from typing import Literal

# LogRecord attributes copied into JSON lines when callers pass them via `extra=`
_EXTRA_KEYS = ("request_id", "severity", "matched", "status_code", "latency_ms")


def _json_formatter(record: logging.LogRecord) -> str:
    payload = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    for key in _EXTRA_KEYS:
        if hasattr(record, key):
            payload[key] = getattr(record, key)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, ensure_ascii=False, default=str)


class JsonStreamHandler(logging.StreamHandler):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def resolve_level(level: int | str) -> int:
    """Accept 10/"DEBUG"/"debug"; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO, fmt: Literal["console", "json"] = "console") -> None:
    """
    Configure root + uvicorn loggers. Idempotent.
    """
    root = logging.getLogger()
    if getattr(root, "_sahay_logging_inited", False):
        return

    for h in list(root.handlers):
        root.removeHandler(h)

    lvl = resolve_level(level)
    handler: logging.Handler
    if fmt == "json":
        handler = JsonStreamHandler(stream=sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "[%(levelname)s] %(asctime)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    root.setLevel(lvl)
    root.addHandler(handler)

    # align uvicorn if present
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logger = logging.getLogger(name)
        logger.setLevel(lvl)
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.addHandler(handler)
        logger.propagate = False

    # the SDK logs every request at INFO
    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))

    root._sahay_logging_inited = True  # type: ignore[attr-defined]
