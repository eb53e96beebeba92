import asyncio

import httpx
import pytest

from clients.dealerscope_dashboard.application.session_provider import SessionProvider, SessionUser
from clients.dealerscope_dashboard.domain.models.scope import Profile, ReportingPeriod
from clients.dealerscope_dashboard.infrastructure.sdk_adapter.auth_adapter import AuthAdapter
from clients.dealerscope_dashboard.infrastructure.sdk_adapter.dashboard_adapter import SdkDashboardDataSource
from clients.dealerscope_sdk.config import SDKConfig
from clients.dealerscope_sdk.errors import ApiError
from clients.dealerscope_sdk.http_client import HttpClient

CONFIG = SDKConfig(
    base_url="http://test/",
    timeout_seconds=5.0,
    verify_ssl=True,
    retry_max_attempts=1,
    retry_backoff_ms=0,
)

ROUTES = {
    "/dealerscope/me/profile": {"id": "u1", "role": "store_gm", "store_id": "s1", "store_group_id": None},
    "/dealerscope/scope/stores": {
        "stores": [{"id": "s1", "name": "Alpha"}, {"id": "s2", "name": "Beta", "group_id": "g1"}],
        "can_switch_stores": True,
    },
    "/dealerscope/scope/stores/s1/departments": {
        "departments": [{"id": "d1", "name": "Service", "store_id": "s1"}],
    },
    "/dealerscope/departments/d1/rock-counts": {"on_track": 2, "total": 2},
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/dealerscope/auth/login":
        return httpx.Response(200, json={"access_token": "tok", "token_type": "bearer", "user_id": "u1"})
    if request.headers.get("Authorization") != "Bearer tok":
        return httpx.Response(401, json={"code": "INVALID_TOKEN", "message": "Invalid token"})
    payload = ROUTES.get(request.url.path)
    if payload is None:
        return httpx.Response(404, json={"code": "NOT_FOUND", "message": "Not Found"})
    return httpx.Response(200, json=payload)


def _http() -> HttpClient:
    return HttpClient(CONFIG, client=httpx.AsyncClient(transport=httpx.MockTransport(_handler), base_url="http://test"))


def test_data_source_maps_payloads() -> None:
    async def scenario() -> None:
        http = _http()
        session = SessionProvider()
        session.sign_in(SessionUser(user_id="u1", access_token="tok"))
        source = SdkDashboardDataSource(http, session)
        try:
            profile = await source.load_profile("u1")
            scope = await source.resolve_stores(profile)
            departments = await source.resolve_departments(profile, "s1")
            rocks = await source.load_rock_counts("d1", ReportingPeriod())
        finally:
            await http.aclose()

        assert profile == Profile(user_id="u1", role="store_gm", store_id="s1")
        assert scope.store_ids == ["s1", "s2"]
        assert scope.stores[1].group_id == "g1"
        assert scope.can_switch_stores is True
        assert [department.store_id for department in departments] == ["s1"]
        assert rocks == {"on_track": 2, "at_risk": 0, "off_track": 0, "completed": 0, "total": 2}

    asyncio.run(scenario())


def test_profile_for_other_user_is_rejected() -> None:
    async def scenario() -> None:
        http = _http()
        session = SessionProvider()
        session.sign_in(SessionUser(user_id="u1", access_token="tok"))
        try:
            await SdkDashboardDataSource(http, session).load_profile("someone-else")
        finally:
            await http.aclose()

    with pytest.raises(ApiError) as exc:
        asyncio.run(scenario())
    assert exc.value.code == "PROFILE_MISMATCH"


def test_calls_without_session_fail_fast() -> None:
    async def scenario() -> None:
        http = _http()
        try:
            await SdkDashboardDataSource(http, SessionProvider()).load_todo_counts("d1")
        finally:
            await http.aclose()

    with pytest.raises(ApiError) as exc:
        asyncio.run(scenario())
    assert exc.value.code == "SESSION_REQUIRED"


def test_auth_adapter_signs_in_and_out_on_rejected_token() -> None:
    async def scenario() -> SessionProvider:
        http = _http()
        session = SessionProvider()
        auth = AuthAdapter(http, session)
        try:
            user = await auth.login("gm@example.com", "secret")
            assert session.current_user() == user
            session.sign_in(SessionUser(user_id="u1", access_token="stale"))
            with pytest.raises(ApiError):
                await SdkDashboardDataSource(http, session).load_profile("u1")
        finally:
            await http.aclose()
        return session

    session = asyncio.run(scenario())
    assert session.current_user() is None
