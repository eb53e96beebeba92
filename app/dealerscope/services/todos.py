from __future__ import annotations

from datetime import date

from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.db.models import Todo
from app.dealerscope.realtime import TODOS, change_bus
from app.dealerscope.repos._ids import as_uuid
from app.dealerscope.repos.todos import TodoRepository

TODO_BUCKETS = ("pending", "past_due", "completed")


class TodoService:
    def __init__(self, db, *, bus=change_bus):
        self.repo = TodoRepository(db)
        self.bus = bus

    def counts(self, department_id, *, today: date | None = None) -> dict[str, int]:
        raw = self.repo.count_by_status(department_id, today=today or date.today())
        counts = {bucket: raw.get(bucket, 0) for bucket in TODO_BUCKETS}
        counts["total"] = sum(raw.values())
        return counts

    def get(self, todo_id) -> Todo:
        todo = self.repo.get_by_id(todo_id)
        if todo is None:
            raise AppError(ErrorCatalog.TODO_NOT_FOUND, details={"todo_id": str(todo_id)})
        return todo

    def create(self, department, *, created_by=None, **values) -> Todo:
        todo = self.repo.create(Todo(department_id=department.id, created_by=as_uuid(created_by), **values))
        self.bus.publish(TODOS)
        return todo

    def update(self, todo: Todo, **changes) -> Todo:
        for key, value in changes.items():
            setattr(todo, key, value)
        updated = self.repo.update(todo)
        self.bus.publish(TODOS)
        return updated
