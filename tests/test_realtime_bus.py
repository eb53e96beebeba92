import logging

from app.dealerscope.realtime import KPI_DEFINITIONS, ROCKS, SCORECARD_ENTRIES, TODOS, ChangeBus
from app.dealerscope.services.goals import RockService
from app.dealerscope.services.scorecard import ScorecardService
from app.dealerscope.services.todos import TodoService
from tests.scope_helpers import create_department, create_store


def test_publish_reaches_only_matching_subscribers():
    bus = ChangeBus()
    calls = []
    bus.subscribe(TODOS, lambda: calls.append("todos"))
    bus.subscribe(ROCKS, lambda: calls.append("rocks"))

    delivered = bus.publish(TODOS)

    assert delivered == 1
    assert calls == ["todos"]


def test_unsubscribe_stops_delivery():
    bus = ChangeBus()
    calls = []
    unsubscribe = bus.subscribe(TODOS, lambda: calls.append(1))

    unsubscribe()
    unsubscribe()
    bus.publish(TODOS)

    assert calls == []
    assert bus.subscriber_count(TODOS) == 0


def test_failing_subscriber_does_not_block_others(caplog):
    bus = ChangeBus()
    calls = []

    def broken():
        raise RuntimeError("boom")

    bus.subscribe(ROCKS, broken)
    bus.subscribe(ROCKS, lambda: calls.append("ok"))

    with caplog.at_level(logging.WARNING, logger="dealerscope.realtime"):
        delivered = bus.publish(ROCKS)

    assert delivered == 1
    assert calls == ["ok"]
    assert "realtime_delivery_failed" in caplog.text


def test_writes_publish_their_record_type(db_session):
    store = create_store(db_session, "North")
    department = create_department(db_session, store, "Service")
    bus = ChangeBus()
    published = []
    for record_type in (KPI_DEFINITIONS, SCORECARD_ENTRIES, ROCKS, TODOS):
        bus.subscribe(record_type, lambda record_type=record_type: published.append(record_type))

    scorecard = ScorecardService(db_session, bus=bus)
    kpi = scorecard.create_kpi(department, name="Hours", target_value=100)
    scorecard.upsert_entry(kpi, actual_value=90, month="2025-01")
    RockService(db_session, bus=bus).create(department, title="Launch", quarter=1, year=2025)
    todos = TodoService(db_session, bus=bus)
    todo = todos.create(department, title="Call back")
    todos.update(todo, status="completed")

    assert published == [KPI_DEFINITIONS, SCORECARD_ENTRIES, ROCKS, TODOS, TODOS]
