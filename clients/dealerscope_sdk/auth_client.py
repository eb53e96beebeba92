from __future__ import annotations

from clients.dealerscope_sdk.http_client import HttpClient


class AuthClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def login(self, email: str, password: str) -> dict:
        return await self.http_client.request(
            "POST",
            "/dealerscope/auth/login",
            json_body={"email": email, "password": password},
        )
