from __future__ import annotations

import uuid
from datetime import datetime, timedelta

from app.dealerscope.core.security import create_session_token, get_password_hash
from app.dealerscope.db.models import Department, Store, StoreGroup, User
from app.dealerscope.repos.access_grants import AccessGrantRepository
from app.dealerscope.repos.departments import DepartmentRepository
from app.dealerscope.repos.stores import StoreRepository
from app.dealerscope.repos.users import UserRepository

PASSWORD = "Pass1234!"
_epoch = datetime(2025, 1, 1, 8, 0, 0)


def login(client, email: str, password: str = PASSWORD) -> str:
    response = client.post("/dealerscope/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def auth_headers(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_session_token(user)}"}


def create_group(db_session, name: str = "Group") -> StoreGroup:
    group = StoreGroup(id=uuid.uuid4(), name=f"{name} {uuid.uuid4().hex[:6]}")
    db_session.add(group)
    db_session.commit()
    return group


def create_store(db_session, name: str, *, group=None, order: int = 0) -> Store:
    store = Store(
        id=uuid.uuid4(),
        name=name,
        group_id=group.id if group else None,
        created_at=_epoch + timedelta(seconds=order),
    )
    return StoreRepository(db_session).create(store)


def create_department(db_session, store, name: str) -> Department:
    department = Department(id=uuid.uuid4(), store_id=store.id, name=name, department_type=name.lower())
    return DepartmentRepository(db_session).create(department)


def create_user(
    db_session,
    *,
    role: str = "store_gm",
    store=None,
    group=None,
    email: str | None = None,
    is_active: bool = True,
) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
        full_name="Test User",
        hashed_password=get_password_hash(PASSWORD),
        role=role,
        store_id=store.id if store else None,
        store_group_id=group.id if group else None,
        is_active=is_active,
    )
    return UserRepository(db_session).create(user)


def grant_stores(db_session, user, *stores) -> None:
    repo = AccessGrantRepository(db_session)
    for store in stores:
        repo.grant_store(user.id, store.id)


def grant_departments(db_session, user, *departments) -> None:
    repo = AccessGrantRepository(db_session)
    for department in departments:
        repo.grant_department(user.id, department.id)
