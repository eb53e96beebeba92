from tests.scope_helpers import auth_headers, create_department, create_store, create_user


def _setup(db_session):
    store = create_store(db_session, "North")
    department = create_department(db_session, store, "Service")
    user = create_user(db_session, role="store_gm", store=store)
    return department, auth_headers(user)


def _create_kpi(client, department, headers, **payload):
    response = client.post(f"/dealerscope/departments/{department.id}/kpis", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def _put_entry(client, kpi, headers, **payload):
    return client.put(f"/dealerscope/kpis/{kpi['id']}/entries", json=payload, headers=headers)


def test_kpi_definitions_listed_by_display_order(client, db_session):
    department, headers = _setup(db_session)
    _create_kpi(client, department, headers, name="Gross", metric_type="dollar", target_value=1000, display_order=2)
    _create_kpi(client, department, headers, name="Hours", target_value=100, display_order=1)

    response = client.get(f"/dealerscope/departments/{department.id}/kpis", headers=headers)

    assert response.status_code == 200
    assert [kpi["name"] for kpi in response.json()["kpis"]] == ["Hours", "Gross"]


def test_entry_upsert_computes_variance_and_status(client, db_session):
    department, headers = _setup(db_session)
    kpi = _create_kpi(client, department, headers, name="Hours", target_value=100)

    first = _put_entry(client, kpi, headers, week_start_date="2025-01-06", actual_value=92)
    assert first.status_code == 200
    assert first.json()["variance"] == -8.0
    assert first.json()["status"] == "yellow"

    second = _put_entry(client, kpi, headers, week_start_date="2025-01-06", actual_value=120)
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["status"] == "green"


def test_entry_without_actual_has_no_status(client, db_session):
    department, headers = _setup(db_session)
    kpi = _create_kpi(client, department, headers, name="Hours", target_value=100)

    response = _put_entry(client, kpi, headers, week_start_date="2025-01-06", actual_value=None)

    assert response.status_code == 200
    assert response.json()["status"] is None
    assert response.json()["variance"] is None


def test_entry_week_must_start_on_monday(client, db_session):
    department, headers = _setup(db_session)
    kpi = _create_kpi(client, department, headers, name="Hours", target_value=100)

    response = _put_entry(client, kpi, headers, week_start_date="2025-01-07", actual_value=90)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_entry_requires_exactly_one_period(client, db_session):
    department, headers = _setup(db_session)
    kpi = _create_kpi(client, department, headers, name="Hours", target_value=100)

    both = _put_entry(client, kpi, headers, week_start_date="2025-01-06", month="2025-01", actual_value=1)
    neither = _put_entry(client, kpi, headers, actual_value=1)

    assert both.status_code == 422
    assert neither.status_code == 422


def test_unknown_kpi_returns_not_found(client, db_session):
    _, headers = _setup(db_session)

    response = client.put(
        "/dealerscope/kpis/00000000-0000-0000-0000-000000000000/entries",
        json={"week_start_date": "2025-01-06", "actual_value": 1},
        headers=headers,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "KPI_NOT_FOUND"


def test_weekly_status_rollup_uses_latest_entry_in_quarter(client, db_session):
    department, headers = _setup(db_session)
    hours = _create_kpi(client, department, headers, name="Hours", target_value=100, display_order=1)
    rate = _create_kpi(
        client, department, headers, name="Rate", metric_type="percentage", target_value=90, display_order=2
    )
    _create_kpi(
        client, department, headers, name="Comebacks", target_value=50, target_direction="below", display_order=3
    )
    untargeted = _create_kpi(client, department, headers, name="Notes", display_order=4)

    _put_entry(client, hours, headers, week_start_date="2025-01-06", actual_value=120)
    _put_entry(client, hours, headers, week_start_date="2025-01-13", actual_value=92)
    _put_entry(client, hours, headers, week_start_date="2025-04-07", actual_value=0)
    _put_entry(client, rate, headers, week_start_date="2025-01-06", actual_value=70)
    _put_entry(client, untargeted, headers, week_start_date="2025-01-06", actual_value=10)

    response = client.get(
        f"/dealerscope/departments/{department.id}/kpi-status",
        params={"year": 2025, "quarter": 1, "granularity": "weekly"},
        headers=headers,
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["counts"] == {"green": 0, "yellow": 1, "red": 1, "missing": 2}
    by_name = {item["name"]: item for item in payload["items"]}
    assert by_name["Hours"]["status"] == "yellow"
    assert by_name["Hours"]["period_key"] == "2025-01-13"
    assert by_name["Rate"]["status"] == "red"
    assert by_name["Comebacks"]["status"] == "missing"
    assert by_name["Notes"]["status"] == "missing"


def test_monthly_status_rollup(client, db_session):
    department, headers = _setup(db_session)
    hours = _create_kpi(client, department, headers, name="Hours", target_value=100)
    _put_entry(client, hours, headers, month="2024-12", actual_value=80)
    _put_entry(client, hours, headers, month="2025-02", actual_value=105)

    response = client.get(
        f"/dealerscope/departments/{department.id}/kpi-status",
        params={"year": 2025, "quarter": 1, "granularity": "monthly"},
        headers=headers,
    )

    payload = response.json()
    assert payload["granularity"] == "monthly"
    assert payload["counts"]["green"] == 1
    assert payload["items"][0]["period_key"] == "2025-02"


def test_status_defaults_to_current_quarter(client, db_session):
    department, headers = _setup(db_session)

    response = client.get(f"/dealerscope/departments/{department.id}/kpi-status", headers=headers)

    assert response.status_code == 200
    payload = response.json()
    assert 1 <= payload["quarter"] <= 4
    assert payload["counts"] == {"green": 0, "yellow": 0, "red": 0, "missing": 0}


def test_status_rejects_unknown_granularity(client, db_session):
    department, headers = _setup(db_session)

    response = client.get(
        f"/dealerscope/departments/{department.id}/kpi-status",
        params={"granularity": "daily"},
        headers=headers,
    )

    assert response.status_code == 422
