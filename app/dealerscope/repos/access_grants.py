from sqlalchemy import select

from app.dealerscope.db.models import UserDepartmentAccess, UserStoreAccess
from app.dealerscope.repos._ids import as_uuid


class AccessGrantRepository:
    def __init__(self, db):
        self.db = db

    def list_store_ids(self, user_id) -> list:
        stmt = (
            select(UserStoreAccess.store_id)
            .where(UserStoreAccess.user_id == as_uuid(user_id))
            .order_by(UserStoreAccess.granted_at.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_department_ids(self, user_id) -> list:
        stmt = (
            select(UserDepartmentAccess.department_id)
            .where(UserDepartmentAccess.user_id == as_uuid(user_id))
            .order_by(UserDepartmentAccess.granted_at.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def grant_store(self, user_id, store_id, *, granted_by=None) -> UserStoreAccess:
        grant = UserStoreAccess(user_id=as_uuid(user_id), store_id=as_uuid(store_id), granted_by=as_uuid(granted_by))
        self.db.add(grant)
        self.db.commit()
        return grant

    def grant_department(self, user_id, department_id, *, granted_by=None) -> UserDepartmentAccess:
        grant = UserDepartmentAccess(
            user_id=as_uuid(user_id),
            department_id=as_uuid(department_id),
            granted_by=as_uuid(granted_by),
        )
        self.db.add(grant)
        self.db.commit()
        return grant
