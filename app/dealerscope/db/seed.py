from sqlalchemy import select

from app.dealerscope.core.config import settings
from app.dealerscope.core.roles import SUPER_ADMIN
from app.dealerscope.core.security import get_password_hash
from app.dealerscope.db.models import Department, Store, StoreGroup, User


def _default_department_names() -> list[str]:
    return [name.strip() for name in settings.DEFAULT_DEPARTMENTS.split(",") if name.strip()]


def _get_or_create_group(db):
    group = db.execute(select(StoreGroup).where(StoreGroup.name == settings.DEFAULT_GROUP_NAME)).scalars().first()
    if group:
        return group
    group = StoreGroup(name=settings.DEFAULT_GROUP_NAME)
    db.add(group)
    db.flush()
    return group


def _get_or_create_store(db, group):
    store = (
        db.execute(select(Store).where(Store.group_id == group.id, Store.name == settings.DEFAULT_STORE_NAME))
        .scalars()
        .first()
    )
    if store:
        return store
    store = Store(group_id=group.id, name=settings.DEFAULT_STORE_NAME)
    db.add(store)
    db.flush()
    return store


def _get_or_create_departments(db, store):
    existing = {
        department.name
        for department in db.execute(select(Department).where(Department.store_id == store.id)).scalars().all()
    }
    for name in _default_department_names():
        if name in existing:
            continue
        db.add(Department(store_id=store.id, name=name, department_type=name.lower()))


def _get_or_create_superadmin(db, group):
    user = db.execute(select(User).where(User.email == settings.SUPERADMIN_EMAIL)).scalars().first()
    if user:
        return user
    user = User(
        email=settings.SUPERADMIN_EMAIL,
        full_name=settings.SUPERADMIN_FULL_NAME,
        hashed_password=get_password_hash(settings.SUPERADMIN_PASSWORD),
        role=SUPER_ADMIN,
        store_group_id=group.id,
        is_active=True,
    )
    db.add(user)
    return user


def run_seed(db):
    group = _get_or_create_group(db)
    store = _get_or_create_store(db, group)
    _get_or_create_departments(db, store)
    _get_or_create_superadmin(db, group)
    db.commit()


if __name__ == "__main__":
    from app.dealerscope.db.session import SessionLocal

    with SessionLocal() as session:
        run_seed(session)
