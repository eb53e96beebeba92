"""Which stores a user may view.

Resolution order:
1. ``super_admin`` sees every store and can always switch.
2. A store group without a home store grants the whole group.
3. Explicit ``user_store_access`` grants, merged with the home store.
4. The home store alone.
5. Nothing.

Stores are ordered by name; equal names keep creation order.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.core.roles import is_global_admin
from app.dealerscope.repos._ids import as_uuid
from app.dealerscope.repos.access_grants import AccessGrantRepository
from app.dealerscope.repos.stores import StoreRepository

SOURCE_GLOBAL = "global"
SOURCE_GROUP = "group"
SOURCE_GRANTS = "grants"
SOURCE_HOME_STORE = "home_store"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class StoreScope:
    stores: list = field(default_factory=list)
    can_switch_stores: bool = False
    source: str = SOURCE_NONE

    @property
    def store_ids(self) -> list:
        return [store.id for store in self.stores]

    def contains(self, store_id) -> bool:
        key = as_uuid(store_id)
        return key is not None and key in self.store_ids


class AccessScopeService:
    def __init__(self, db):
        self.stores = StoreRepository(db)
        self.grants = AccessGrantRepository(db)

    def resolve(self, user) -> StoreScope:
        if is_global_admin(user.role):
            return StoreScope(stores=list(self.stores.list_all()), can_switch_stores=True, source=SOURCE_GLOBAL)

        if user.store_group_id and not user.store_id:
            stores = list(self.stores.list_by_group(user.store_group_id))
            return StoreScope(stores=stores, can_switch_stores=len(stores) > 1, source=SOURCE_GROUP)

        granted_ids = self.grants.list_store_ids(user.id)
        if granted_ids:
            candidate_ids = ([user.store_id] if user.store_id else []) + granted_ids
            stores = list(self.stores.list_by_ids(candidate_ids))
            return StoreScope(stores=stores, can_switch_stores=True, source=SOURCE_GRANTS)

        if user.store_id:
            store = self.stores.get_by_id(user.store_id)
            stores = [store] if store is not None else []
            return StoreScope(stores=stores, can_switch_stores=False, source=SOURCE_HOME_STORE)

        return StoreScope()

    def ensure_store(self, user, store_id):
        """Return the store when it is inside the user's scope, else raise."""
        scope = self.resolve(user)
        key = as_uuid(store_id)
        for store in scope.stores:
            if store.id == key:
                return store
        raise AppError(ErrorCatalog.STORE_SCOPE_MISMATCH, details={"store_id": str(store_id)})
