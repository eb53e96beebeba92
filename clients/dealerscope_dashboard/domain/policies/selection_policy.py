from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from clients.dealerscope_dashboard.domain.models.scope import DepartmentRef, StoreRef


@dataclass(frozen=True)
class PreferredDepartmentPolicy:
    """Default department when no valid hint exists: first name containing ``keyword``, else the first candidate."""

    keyword: str = "service"

    def choose(self, candidates: Sequence[DepartmentRef]) -> DepartmentRef | None:
        if not candidates:
            return None
        needle = self.keyword.strip().lower()
        if needle:
            for department in candidates:
                if needle in department.name.lower():
                    return department
        return candidates[0]


class StoreSelectionPolicy:
    @classmethod
    def find(cls, candidates: Sequence[StoreRef], store_id: str | None) -> StoreRef | None:
        if not store_id:
            return None
        for store in candidates:
            if store.id == store_id:
                return store
        return None

    @classmethod
    def select(cls, candidates: Sequence[StoreRef], hint: str | None) -> StoreRef | None:
        if not candidates:
            return None
        return cls.find(candidates, hint) or candidates[0]


class DepartmentSelectionPolicy:
    @classmethod
    def find(
        cls,
        candidates: Sequence[DepartmentRef],
        department_id: str | None,
        active_store_id: str | None,
    ) -> DepartmentRef | None:
        """Return the candidate only when it also belongs to the active store."""
        if not department_id or not active_store_id:
            return None
        for department in candidates:
            if department.id == department_id:
                return department if department.store_id == active_store_id else None
        return None

    @classmethod
    def select(
        cls,
        candidates: Sequence[DepartmentRef],
        hint: str | None,
        active_store_id: str | None,
        preferred: PreferredDepartmentPolicy,
    ) -> DepartmentRef | None:
        if not active_store_id:
            return None
        in_store = [department for department in candidates if department.store_id == active_store_id]
        return cls.find(in_store, hint, active_store_id) or preferred.choose(in_store)
