from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from app.dealerscope.core.config import settings
from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.db.models import KpiDefinition, ScorecardEntry
from app.dealerscope.realtime import KPI_DEFINITIONS, SCORECARD_ENTRIES, change_bus
from app.dealerscope.repos._ids import as_uuid
from app.dealerscope.repos.scorecard import KpiRepository, ScorecardEntryRepository
from app.dealerscope.services.fiscal_calendar import quarter_months, quarter_weeks
from app.dealerscope.services.kpi_status import KpiStatus, evaluate, summarize

GRANULARITIES = ("weekly", "monthly")


@dataclass(frozen=True)
class KpiStatusItem:
    kpi_id: str
    name: str
    status: KpiStatus
    actual_value: float | None
    target_value: float | None
    variance: float | None
    period_key: str | None


@dataclass(frozen=True)
class KpiStatusSummary:
    department_id: str
    year: int
    quarter: int
    granularity: str
    counts: dict[str, int]
    items: list[KpiStatusItem] = field(default_factory=list)


def _entry_period_key(entry: ScorecardEntry) -> str:
    if entry.entry_type == "monthly":
        return entry.month or ""
    return entry.week_start_date.isoformat() if entry.week_start_date else ""


class ScorecardService:
    def __init__(self, db, *, bus=change_bus, tolerance: float | None = None):
        self.kpis = KpiRepository(db)
        self.entries = ScorecardEntryRepository(db)
        self.bus = bus
        self.tolerance = settings.KPI_AT_RISK_TOLERANCE if tolerance is None else tolerance

    def list_kpis(self, department_id):
        return self.kpis.list_by_department(department_id)

    def create_kpi(self, department, **values) -> KpiDefinition:
        kpi = self.kpis.create(KpiDefinition(department_id=department.id, **values))
        self.bus.publish(KPI_DEFINITIONS)
        return kpi

    def get_kpi(self, kpi_id) -> KpiDefinition:
        kpi = self.kpis.get_by_id(kpi_id)
        if kpi is None:
            raise AppError(ErrorCatalog.KPI_NOT_FOUND, details={"kpi_id": str(kpi_id)})
        return kpi

    def kpi_status(self, department_id, *, year: int, quarter: int, granularity: str = "weekly") -> KpiStatusSummary:
        if granularity not in GRANULARITIES:
            raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"granularity": granularity})
        try:
            if granularity == "monthly":
                periods = quarter_months(year, quarter)
            else:
                periods = quarter_weeks(year, quarter)
        except ValueError as exc:
            raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": str(exc)}) from exc

        kpis = self.kpis.list_by_department(department_id)
        kpi_ids = [kpi.id for kpi in kpis]
        if granularity == "monthly":
            rows = self.entries.list_monthly(kpi_ids, periods)
        else:
            rows = self.entries.list_weekly(kpi_ids, periods)

        latest: dict = {}
        for entry in rows:
            if entry.actual_value is None:
                continue
            current = latest.get(entry.kpi_id)
            if current is None or _entry_period_key(entry) > _entry_period_key(current):
                latest[entry.kpi_id] = entry

        items = []
        for kpi in kpis:
            entry = latest.get(kpi.id)
            actual = entry.actual_value if entry is not None else None
            variance, status = evaluate(
                actual,
                kpi.target_value,
                metric_type=kpi.metric_type,
                target_direction=kpi.target_direction,
                tolerance=self.tolerance,
            )
            items.append(
                KpiStatusItem(
                    kpi_id=str(kpi.id),
                    name=kpi.name,
                    status=status,
                    actual_value=actual,
                    target_value=kpi.target_value,
                    variance=variance,
                    period_key=_entry_period_key(entry) if entry is not None else None,
                )
            )

        return KpiStatusSummary(
            department_id=str(department_id),
            year=year,
            quarter=quarter,
            granularity=granularity,
            counts=summarize(item.status for item in items),
            items=items,
        )

    def upsert_entry(
        self,
        kpi: KpiDefinition,
        *,
        actual_value: float | None,
        week_start_date: date | None = None,
        month: str | None = None,
        notes: str | None = None,
        user_id=None,
    ) -> ScorecardEntry:
        if (week_start_date is None) == (month is None):
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"message": "exactly one of week_start_date or month is required"},
            )
        if week_start_date is not None and week_start_date.weekday() != 0:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"message": "week_start_date must be a Monday", "week_start_date": week_start_date.isoformat()},
            )

        entry = self.entries.find(kpi.id, week_start_date=week_start_date, month=month)
        if entry is None:
            entry = ScorecardEntry(
                kpi_id=kpi.id,
                entry_type="monthly" if month is not None else "weekly",
                week_start_date=week_start_date,
                month=month,
                created_by=as_uuid(user_id),
            )

        variance, status = evaluate(
            actual_value,
            kpi.target_value,
            metric_type=kpi.metric_type,
            target_direction=kpi.target_direction,
            tolerance=self.tolerance,
        )
        entry.actual_value = actual_value
        entry.variance = variance
        entry.status = None if status is KpiStatus.MISSING else status.value
        entry.notes = notes
        saved = self.entries.upsert(entry)
        self.bus.publish(SCORECARD_ENTRIES)
        return saved
