from sqlalchemy import func, select

from app.dealerscope.db.models import Rock
from app.dealerscope.repos._ids import as_uuid


class RockRepository:
    def __init__(self, db):
        self.db = db

    def count_by_status(self, department_id, *, year: int | None = None, quarter: int | None = None) -> dict[str, int]:
        stmt = (
            select(Rock.status, func.count())
            .where(Rock.department_id == as_uuid(department_id))
            .group_by(Rock.status)
        )
        if year is not None:
            stmt = stmt.where(Rock.year == year)
        if quarter is not None:
            stmt = stmt.where(Rock.quarter == quarter)
        return {status: count for status, count in self.db.execute(stmt).all()}

    def create(self, rock: Rock):
        self.db.add(rock)
        self.db.commit()
        self.db.refresh(rock)
        return rock
