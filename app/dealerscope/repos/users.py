from sqlalchemy import func, select

from app.dealerscope.db.models import User
from app.dealerscope.repos._ids import as_uuid


class UserRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, user_id):
        key = as_uuid(user_id)
        if key is None:
            return None
        return self.db.get(User, key)

    def get_by_email(self, email: str):
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return self.db.execute(stmt).scalars().first()

    def create(self, user: User):
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
