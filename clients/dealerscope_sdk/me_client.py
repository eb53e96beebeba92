from __future__ import annotations

from clients.dealerscope_sdk.http_client import HttpClient


class MeClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def get_profile(self, access_token: str) -> dict:
        return await self.http_client.request("GET", "/dealerscope/me/profile", token=access_token)
