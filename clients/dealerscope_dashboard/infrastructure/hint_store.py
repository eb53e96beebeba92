"""Last-used store/department, persisted between sessions.

Values are untrusted: callers validate them against the live scope before use.
Hints are tagged with the user id that wrote them and are dropped when a
different user binds the store.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

DEFAULT_HINTS_FILE = Path.home() / ".dealerscope_selection_hints.json"

STORE_HINT_KEY = "selectedStore"
DEPARTMENT_HINT_KEY = "selectedDepartment"


def _hints_path() -> Path:
    configured = os.getenv("DEALERSCOPE_SELECTION_HINTS_PATH", "").strip()
    return Path(configured) if configured else DEFAULT_HINTS_FILE


class SelectionHintStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _hints_path()
        self._fingerprint: str | None = None

    def bind_user(self, user_id: str | None) -> None:
        """Bind reads and writes to ``user_id``; ``None`` unbinds and keeps the file for the next session."""
        self._fingerprint = user_id
        if user_id is None:
            return
        payload = self._load()
        if payload and payload.get("session_fingerprint") != user_id:
            self.clear()

    def get(self, key: str) -> str | None:
        if self._fingerprint is None:
            return None
        payload = self._load()
        if payload.get("session_fingerprint") != self._fingerprint:
            return None
        value = (payload.get("hints") or {}).get(key)
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        if self._fingerprint is None:
            return
        hints = self._current_hints()
        hints[key] = value
        self._save(hints)

    def remove(self, key: str) -> None:
        if self._fingerprint is None:
            return
        hints = self._current_hints()
        if hints.pop(key, None) is not None:
            self._save(hints)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def _current_hints(self) -> dict[str, str]:
        payload = self._load()
        if payload.get("session_fingerprint") != self._fingerprint:
            return {}
        hints = payload.get("hints")
        return dict(hints) if isinstance(hints, dict) else {}

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, OSError):
            return {}
        return payload if isinstance(payload, dict) else {}

    def _save(self, hints: dict[str, str]) -> None:
        payload = {"session_fingerprint": self._fingerprint, "hints": hints}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
