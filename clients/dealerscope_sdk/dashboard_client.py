from __future__ import annotations

from typing import Any

from clients.dealerscope_sdk.http_client import HttpClient


class DashboardClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def list_kpis(self, access_token: str, department_id: str) -> dict:
        return await self.http_client.request("GET", f"/dealerscope/departments/{department_id}/kpis", token=access_token)

    async def kpi_status(
        self,
        access_token: str,
        department_id: str,
        *,
        year: int | None = None,
        quarter: int | None = None,
        granularity: str = "weekly",
    ) -> dict:
        return await self.http_client.request(
            "GET",
            f"/dealerscope/departments/{department_id}/kpi-status",
            token=access_token,
            params=_build_query_params(year=year, quarter=quarter, granularity=granularity),
        )

    async def rock_counts(
        self,
        access_token: str,
        department_id: str,
        *,
        year: int | None = None,
        quarter: int | None = None,
    ) -> dict:
        return await self.http_client.request(
            "GET",
            f"/dealerscope/departments/{department_id}/rock-counts",
            token=access_token,
            params=_build_query_params(year=year, quarter=quarter),
        )

    async def todo_counts(self, access_token: str, department_id: str) -> dict:
        return await self.http_client.request(
            "GET",
            f"/dealerscope/departments/{department_id}/todo-counts",
            token=access_token,
        )

    async def create_kpi(self, access_token: str, department_id: str, payload: dict[str, Any]) -> dict:
        return await self.http_client.request(
            "POST",
            f"/dealerscope/departments/{department_id}/kpis",
            token=access_token,
            json_body=payload,
        )

    async def upsert_entry(self, access_token: str, kpi_id: str, payload: dict[str, Any]) -> dict:
        return await self.http_client.request(
            "PUT",
            f"/dealerscope/kpis/{kpi_id}/entries",
            token=access_token,
            json_body=payload,
        )

    async def create_todo(self, access_token: str, department_id: str, payload: dict[str, Any]) -> dict:
        return await self.http_client.request(
            "POST",
            f"/dealerscope/departments/{department_id}/todos",
            token=access_token,
            json_body=payload,
        )


def _build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
