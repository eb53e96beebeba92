from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class Profile:
    user_id: str
    role: str
    store_id: str | None = None
    store_group_id: str | None = None
    email: str | None = None
    full_name: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Profile":
        return cls(
            user_id=str(payload["id"]),
            role=str(payload.get("role") or ""),
            store_id=_optional_str(payload.get("store_id")),
            store_group_id=_optional_str(payload.get("store_group_id")),
            email=payload.get("email"),
            full_name=payload.get("full_name"),
        )


@dataclass(frozen=True)
class StoreRef:
    id: str
    name: str
    group_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "StoreRef":
        return cls(id=str(payload["id"]), name=str(payload["name"]), group_id=_optional_str(payload.get("group_id")))


@dataclass(frozen=True)
class DepartmentRef:
    id: str
    name: str
    store_id: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DepartmentRef":
        return cls(id=str(payload["id"]), name=str(payload["name"]), store_id=str(payload["store_id"]))


@dataclass(frozen=True)
class StoreScope:
    stores: tuple[StoreRef, ...] = field(default_factory=tuple)
    can_switch_stores: bool = False

    @property
    def store_ids(self) -> list[str]:
        return [store.id for store in self.stores]


@dataclass(frozen=True)
class ReportingPeriod:
    """Quarter/year filter for KPI status and rock counts; ``None`` lets the API pick the current quarter."""

    year: int | None = None
    quarter: int | None = None
    granularity: str = "weekly"

    def as_key(self) -> tuple[int | None, int | None, str]:
        return (self.year, self.quarter, self.granularity)
