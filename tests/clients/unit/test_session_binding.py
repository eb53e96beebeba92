import asyncio

from clients.dealerscope_dashboard.application.selection_machine import SelectionMachine
from clients.dealerscope_dashboard.application.session_provider import (
    SIGNED_IN,
    SIGNED_OUT,
    SessionProvider,
    SessionUser,
)
from clients.dealerscope_dashboard.application.state.selection_state import Phase
from tests.clients.fakes import FakeDataSource, MemoryHintStore, build_world


def test_session_provider_emits_transitions() -> None:
    provider = SessionProvider()
    events = []
    unsubscribe = provider.subscribe(lambda event, user: events.append((event, user.user_id if user else None)))

    provider.sign_out()
    provider.sign_in(SessionUser(user_id="u1", access_token="token"))
    provider.sign_out()
    unsubscribe()
    provider.sign_in(SessionUser(user_id="u2", access_token="token"))

    assert events == [(SIGNED_IN, "u1"), (SIGNED_OUT, None)]
    assert provider.current_user().user_id == "u2"


def test_machine_follows_session_events() -> None:
    async def scenario() -> None:
        profile, stores, departments = build_world()
        source = FakeDataSource(profile, stores, departments)
        hints = MemoryHintStore()
        provider = SessionProvider()
        machine = SelectionMachine(source, hints)
        machine.attach_session(provider)

        assert machine.state.phase == Phase.UNAUTHENTICATED

        provider.sign_in(SessionUser(user_id="u1", access_token="token"))
        await machine.drain()

        assert machine.state.phase == Phase.READY
        assert machine.state.active_department_id == "s1-service"
        assert hints.bound_user == "u1"

        provider.sign_out()
        await machine.drain()

        assert machine.state.phase == Phase.UNAUTHENTICATED
        assert machine.state.active_store_id is None
        assert hints.bound_user is None
        machine.close()

    asyncio.run(scenario())


def test_attach_with_existing_session_starts_immediately() -> None:
    async def scenario() -> None:
        profile, stores, departments = build_world()
        source = FakeDataSource(profile, stores, departments)
        provider = SessionProvider()
        provider.sign_in(SessionUser(user_id="u1", access_token="token"))
        machine = SelectionMachine(source, MemoryHintStore())

        machine.attach_session(provider)
        await machine.drain()

        assert machine.state.phase == Phase.READY
        machine.close()

    asyncio.run(scenario())
