from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from clients.dealerscope_dashboard.domain.models.scope import (
    DepartmentRef,
    Profile,
    ReportingPeriod,
    StoreScope,
)

KPI_DEFINITIONS_RECORDS = "kpi_definitions"
SCORECARD_ENTRY_RECORDS = "scorecard_entries"
ROCK_RECORDS = "rocks"
TODO_RECORDS = "todos"


class DashboardDataSource(Protocol):
    async def load_profile(self, user_id: str) -> Profile: ...

    async def resolve_stores(self, profile: Profile) -> StoreScope: ...

    async def resolve_departments(self, profile: Profile, store_id: str) -> list[DepartmentRef]: ...

    async def load_kpi_definitions(self, department_id: str) -> list[dict[str, Any]]: ...

    async def load_kpi_status(self, department_id: str, period: ReportingPeriod) -> dict[str, Any]: ...

    async def load_rock_counts(self, department_id: str, period: ReportingPeriod) -> dict[str, Any]: ...

    async def load_todo_counts(self, department_id: str) -> dict[str, Any]: ...


class ChangeSubscriber(Protocol):
    def subscribe(self, record_type: str, on_change: Callable[[], None]) -> Callable[[], None]: ...


class HintStore(Protocol):
    def bind_user(self, user_id: str | None) -> None: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
