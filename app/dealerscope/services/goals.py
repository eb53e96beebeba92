from __future__ import annotations

from app.dealerscope.db.models import Rock
from app.dealerscope.realtime import ROCKS, change_bus
from app.dealerscope.repos.rocks import RockRepository

ROCK_STATUSES = ("on_track", "at_risk", "off_track", "completed")


class RockService:
    def __init__(self, db, *, bus=change_bus):
        self.repo = RockRepository(db)
        self.bus = bus

    def counts(self, department_id, *, year: int | None = None, quarter: int | None = None) -> dict[str, int]:
        raw = self.repo.count_by_status(department_id, year=year, quarter=quarter)
        counts = {status: raw.get(status, 0) for status in ROCK_STATUSES}
        counts["total"] = sum(raw.values())
        return counts

    def create(self, department, **values) -> Rock:
        rock = self.repo.create(Rock(department_id=department.id, **values))
        self.bus.publish(ROCKS)
        return rock
