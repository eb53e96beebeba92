from datetime import datetime

from sqlalchemy import select

from app.dealerscope.db.models import KpiDefinition, ScorecardEntry
from app.dealerscope.repos._ids import as_uuid


class KpiRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, kpi_id):
        key = as_uuid(kpi_id)
        if key is None:
            return None
        return self.db.get(KpiDefinition, key)

    def list_by_department(self, department_id):
        stmt = (
            select(KpiDefinition)
            .where(KpiDefinition.department_id == as_uuid(department_id))
            .order_by(KpiDefinition.display_order.asc(), KpiDefinition.name.asc())
        )
        return self.db.execute(stmt).scalars().all()

    def create(self, kpi: KpiDefinition):
        self.db.add(kpi)
        self.db.commit()
        self.db.refresh(kpi)
        return kpi


class ScorecardEntryRepository:
    def __init__(self, db):
        self.db = db

    def list_weekly(self, kpi_ids, week_start_dates):
        if not kpi_ids or not week_start_dates:
            return []
        stmt = select(ScorecardEntry).where(
            ScorecardEntry.kpi_id.in_(list(kpi_ids)),
            ScorecardEntry.entry_type == "weekly",
            ScorecardEntry.week_start_date.in_(list(week_start_dates)),
        )
        return self.db.execute(stmt).scalars().all()

    def list_monthly(self, kpi_ids, months):
        if not kpi_ids or not months:
            return []
        stmt = select(ScorecardEntry).where(
            ScorecardEntry.kpi_id.in_(list(kpi_ids)),
            ScorecardEntry.entry_type == "monthly",
            ScorecardEntry.month.in_(list(months)),
        )
        return self.db.execute(stmt).scalars().all()

    def find(self, kpi_id, *, week_start_date=None, month: str | None = None):
        stmt = select(ScorecardEntry).where(ScorecardEntry.kpi_id == as_uuid(kpi_id))
        if month is not None:
            stmt = stmt.where(ScorecardEntry.entry_type == "monthly", ScorecardEntry.month == month)
        else:
            stmt = stmt.where(
                ScorecardEntry.entry_type == "weekly",
                ScorecardEntry.week_start_date == week_start_date,
            )
        return self.db.execute(stmt).scalars().first()

    def upsert(self, entry: ScorecardEntry):
        entry.updated_at = datetime.utcnow()
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry
