from __future__ import annotations

from typing import Any

from clients.dealerscope_dashboard.application.session_provider import SessionProvider
from clients.dealerscope_dashboard.domain.models.scope import (
    DepartmentRef,
    Profile,
    ReportingPeriod,
    StoreRef,
    StoreScope,
)
from clients.dealerscope_sdk.dashboard_client import DashboardClient
from clients.dealerscope_sdk.errors import ApiError
from clients.dealerscope_sdk.http_client import HttpClient
from clients.dealerscope_sdk.me_client import MeClient
from clients.dealerscope_sdk.scope_client import ScopeClient


class SdkDashboardDataSource:
    def __init__(self, http: HttpClient, session: SessionProvider) -> None:
        self.session = session
        self.me_client = MeClient(http)
        self.scope_client = ScopeClient(http)
        self.dashboard_client = DashboardClient(http)

    def _token(self) -> str:
        user = self.session.current_user()
        if user is None:
            raise ApiError(code="SESSION_REQUIRED", message="No signed-in user", status_code=401)
        return user.access_token

    async def load_profile(self, user_id: str) -> Profile:
        payload = await self.me_client.get_profile(self._token())
        profile = Profile.from_payload(payload)
        if profile.user_id != user_id:
            raise ApiError(
                code="PROFILE_MISMATCH",
                message="Profile does not belong to the signed-in user",
                trace_id=payload.get("trace_id"),
            )
        return profile

    async def resolve_stores(self, profile: Profile) -> StoreScope:
        payload = await self.scope_client.list_stores(self._token())
        return StoreScope(
            stores=tuple(StoreRef.from_payload(item) for item in payload.get("stores", [])),
            can_switch_stores=bool(payload.get("can_switch_stores")),
        )

    async def resolve_departments(self, profile: Profile, store_id: str) -> list[DepartmentRef]:
        payload = await self.scope_client.list_departments(self._token(), store_id)
        return [DepartmentRef.from_payload(item) for item in payload.get("departments", [])]

    async def load_kpi_definitions(self, department_id: str) -> list[dict[str, Any]]:
        payload = await self.dashboard_client.list_kpis(self._token(), department_id)
        return list(payload.get("kpis", []))

    async def load_kpi_status(self, department_id: str, period: ReportingPeriod) -> dict[str, Any]:
        payload = await self.dashboard_client.kpi_status(
            self._token(),
            department_id,
            year=period.year,
            quarter=period.quarter,
            granularity=period.granularity,
        )
        return {"counts": payload.get("counts", {}), "items": payload.get("items", [])}

    async def load_rock_counts(self, department_id: str, period: ReportingPeriod) -> dict[str, Any]:
        payload = await self.dashboard_client.rock_counts(
            self._token(),
            department_id,
            year=period.year,
            quarter=period.quarter,
        )
        return {key: payload.get(key, 0) for key in ("on_track", "at_risk", "off_track", "completed", "total")}

    async def load_todo_counts(self, department_id: str) -> dict[str, Any]:
        payload = await self.dashboard_client.todo_counts(self._token(), department_id)
        return {key: payload.get(key, 0) for key in ("pending", "past_due", "completed", "total")}
