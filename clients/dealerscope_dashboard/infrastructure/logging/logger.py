import json
import logging
import os
from datetime import datetime, timezone

LOG_LEVEL_ENV = "DEALERSCOPE_LOG_LEVEL"

# Outcomes that point at a degraded selection rather than normal flow.
_WARNING_OUTCOMES = {"failed", "rejected", "no_stores"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def selection_event(
    action: str,
    outcome: str,
    *,
    user_id: str | None,
    role: str | None,
    store_id: str | None,
    department_id: str | None,
    detail: str | None = None,
) -> dict:
    return {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": f"selection.{action}",
        "outcome": outcome,
        "user_id": user_id,
        "role": role,
        "store_id": store_id,
        "department_id": department_id,
        "detail": detail,
    }


def log_selection(logger: logging.Logger, event: dict) -> None:
    level = logging.WARNING if event.get("outcome") in _WARNING_OUTCOMES else logging.INFO
    logger.log(level, json.dumps(event, ensure_ascii=False, default=str))
