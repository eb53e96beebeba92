from datetime import date

from sqlalchemy import and_, case, func, select

from app.dealerscope.db.models import Todo
from app.dealerscope.repos._ids import as_uuid


class TodoRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, todo_id):
        key = as_uuid(todo_id)
        if key is None:
            return None
        return self.db.get(Todo, key)

    def count_by_status(self, department_id, *, today: date) -> dict[str, int]:
        bucket = case(
            (
                and_(Todo.status == "pending", Todo.due_date.is_not(None), Todo.due_date < today),
                "past_due",
            ),
            else_=Todo.status,
        )
        stmt = (
            select(bucket, func.count())
            .where(Todo.department_id == as_uuid(department_id))
            .group_by(bucket)
        )
        return {status: count for status, count in self.db.execute(stmt).all()}

    def create(self, todo: Todo):
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def update(self, todo: Todo):
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo
