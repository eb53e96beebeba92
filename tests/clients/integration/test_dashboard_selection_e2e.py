import asyncio

import httpx

from app.dealerscope.db.models import KpiDefinition
from app.dealerscope.realtime import change_bus
from clients.dealerscope_dashboard.application.selection_machine import SelectionMachine
from clients.dealerscope_dashboard.application.session_provider import SessionProvider
from clients.dealerscope_dashboard.application.state.selection_state import (
    KPI_DEFINITIONS_SLOT,
    KPI_STATUS_SLOT,
    TODO_COUNTS_SLOT,
    Phase,
)
from clients.dealerscope_dashboard.infrastructure.hint_store import STORE_HINT_KEY, SelectionHintStore
from clients.dealerscope_dashboard.infrastructure.sdk_adapter.auth_adapter import AuthAdapter
from clients.dealerscope_dashboard.infrastructure.sdk_adapter.dashboard_adapter import SdkDashboardDataSource
from clients.dealerscope_sdk.config import SDKConfig
from clients.dealerscope_sdk.dashboard_client import DashboardClient
from clients.dealerscope_sdk.http_client import HttpClient
from tests.scope_helpers import PASSWORD, create_department, create_group, create_store, create_user

CONFIG = SDKConfig(
    base_url="http://test/",
    timeout_seconds=10.0,
    verify_ssl=True,
    retry_max_attempts=1,
    retry_backoff_ms=0,
)


def test_selection_against_live_api(api_app, db_session, tmp_path) -> None:
    group = create_group(db_session)
    north = create_store(db_session, "North", group=group, order=0)
    south = create_store(db_session, "South", group=group, order=1)
    create_department(db_session, north, "Parts")
    service = create_department(db_session, north, "Service")
    sales = create_department(db_session, south, "Sales")
    create_user(db_session, role="store_gm", group=group, email="gm@example.com")
    db_session.add(KpiDefinition(department_id=service.id, name="Hours", target_value=100))
    db_session.commit()

    hints = SelectionHintStore(tmp_path / "hints.json")

    async def scenario() -> None:
        transport = httpx.ASGITransport(app=api_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as raw_client:
            http = HttpClient(CONFIG, client=raw_client)
            session = SessionProvider()
            auth = AuthAdapter(http, session)
            machine = SelectionMachine(SdkDashboardDataSource(http, session), hints)
            machine.attach_session(session)
            machine.bind_realtime(change_bus)
            try:
                await auth.login("gm@example.com", PASSWORD)
                await machine.drain()

                state = machine.state
                assert state.phase == Phase.READY
                assert [store.name for store in state.stores] == ["North", "South"]
                assert state.can_switch_stores is True
                assert state.active_store_id == str(north.id)
                assert state.active_department_id == str(service.id)
                assert [kpi["name"] for kpi in state.slots[KPI_DEFINITIONS_SLOT].data] == ["Hours"]
                assert state.slots[KPI_STATUS_SLOT].data["counts"]["missing"] == 1
                assert state.slots[TODO_COUNTS_SLOT].data["pending"] == 0
                assert state.switching is False

                token = session.current_user().access_token
                await DashboardClient(http).create_todo(token, str(service.id), {"title": "Call back"})
                await machine.drain()

                assert state.slots[TODO_COUNTS_SLOT].data["pending"] == 1

                assert await machine.select_store(str(south.id)) is True
                await machine.drain()

                assert state.active_department_id == str(sales.id)
                assert state.slots[KPI_DEFINITIONS_SLOT].data == []
                assert hints.get(STORE_HINT_KEY) == str(south.id)

                auth.logout()
                await machine.drain()
                assert state.phase == Phase.UNAUTHENTICATED

                await auth.login("gm@example.com", PASSWORD)
                await machine.drain()

                assert state.phase == Phase.READY
                assert state.active_store_id == str(south.id)
                assert state.active_department_id == str(sales.id)
            finally:
                machine.close()

    asyncio.run(scenario())
