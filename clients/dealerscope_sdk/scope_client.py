from __future__ import annotations

from clients.dealerscope_sdk.http_client import HttpClient


class ScopeClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def list_stores(self, access_token: str) -> dict:
        return await self.http_client.request("GET", "/dealerscope/scope/stores", token=access_token)

    async def list_departments(self, access_token: str, store_id: str) -> dict:
        return await self.http_client.request(
            "GET",
            f"/dealerscope/scope/stores/{store_id}/departments",
            token=access_token,
        )
