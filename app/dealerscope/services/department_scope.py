from __future__ import annotations

from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.core.roles import is_department_scoped
from app.dealerscope.repos._ids import as_uuid
from app.dealerscope.repos.access_grants import AccessGrantRepository
from app.dealerscope.repos.departments import DepartmentRepository
from app.dealerscope.services.access_scope import AccessScopeService


class DepartmentScopeService:
    """Which departments of the active store a user may view.

    Department managers are limited to their ``user_department_access``
    grants; every other role sees all departments of the store. Both paths
    are restricted to departments owned by the active store.
    """

    def __init__(self, db):
        self.departments = DepartmentRepository(db)
        self.grants = AccessGrantRepository(db)
        self.access_scope = AccessScopeService(db)

    def resolve(self, user, active_store_id) -> list | None:
        """``None`` means pending: no store is active yet."""
        store_key = as_uuid(active_store_id)
        if store_key is None:
            return None

        if is_department_scoped(user.role):
            granted_ids = self.grants.list_department_ids(user.id)
            if not granted_ids:
                return []
            return [
                department
                for department in self.departments.list_by_ids(granted_ids)
                if department.store_id == store_key
            ]

        return list(self.departments.list_by_store(store_key))

    def resolve_for_store(self, user, store_id) -> list:
        store = self.access_scope.ensure_store(user, store_id)
        return self.resolve(user, store.id) or []

    def ensure_department(self, user, department_id):
        department = self.departments.get_by_id(department_id)
        denied = AppError(ErrorCatalog.DEPARTMENT_SCOPE_MISMATCH, details={"department_id": str(department_id)})
        if department is None:
            raise denied
        if not self.access_scope.resolve(user).contains(department.store_id):
            raise denied
        if is_department_scoped(user.role) and department.id not in self.grants.list_department_ids(user.id):
            raise denied
        return department
