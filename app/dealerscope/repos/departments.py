from sqlalchemy import select

from app.dealerscope.db.models import Department
from app.dealerscope.repos._ids import as_uuid


class DepartmentRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, department_id):
        key = as_uuid(department_id)
        if key is None:
            return None
        return self.db.get(Department, key)

    def list_by_store(self, store_id):
        stmt = (
            select(Department)
            .where(Department.store_id == as_uuid(store_id))
            .order_by(Department.name.asc(), Department.created_at.asc())
        )
        return self.db.execute(stmt).scalars().all()

    def list_by_ids(self, department_ids):
        keys = [key for key in (as_uuid(department_id) for department_id in department_ids) if key is not None]
        if not keys:
            return []
        stmt = (
            select(Department)
            .where(Department.id.in_(keys))
            .order_by(Department.name.asc(), Department.created_at.asc())
        )
        return self.db.execute(stmt).scalars().all()

    def create(self, department: Department):
        self.db.add(department)
        self.db.commit()
        self.db.refresh(department)
        return department
