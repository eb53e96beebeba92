from sqlalchemy import select

from app.dealerscope.db.models import Store
from app.dealerscope.repos._ids import as_uuid


class StoreRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, store_id):
        key = as_uuid(store_id)
        if key is None:
            return None
        return self.db.get(Store, key)

    def list_all(self):
        stmt = select(Store).order_by(Store.name.asc(), Store.created_at.asc())
        return self.db.execute(stmt).scalars().all()

    def list_by_group(self, group_id):
        stmt = (
            select(Store)
            .where(Store.group_id == as_uuid(group_id))
            .order_by(Store.name.asc(), Store.created_at.asc())
        )
        return self.db.execute(stmt).scalars().all()

    def list_by_ids(self, store_ids):
        keys = [key for key in (as_uuid(store_id) for store_id in store_ids) if key is not None]
        if not keys:
            return []
        stmt = select(Store).where(Store.id.in_(keys)).order_by(Store.name.asc(), Store.created_at.asc())
        return self.db.execute(stmt).scalars().all()

    def create(self, store: Store):
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        return store
