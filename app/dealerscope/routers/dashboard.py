from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from app.dealerscope.core.deps import require_active_user
from app.dealerscope.db.session import get_db
from app.dealerscope.repos._ids import as_uuid
from app.dealerscope.schemas.dashboard import (
    KpiCreateRequest,
    KpiItem,
    KpiListResponse,
    KpiStatusCounts,
    KpiStatusItemResponse,
    KpiStatusResponse,
    RockCountsResponse,
    RockCreateRequest,
    RockResponse,
    ScorecardEntryRequest,
    ScorecardEntryResponse,
    TodoCountsResponse,
    TodoCreateRequest,
    TodoResponse,
    TodoUpdateRequest,
)
from app.dealerscope.services.department_scope import DepartmentScopeService
from app.dealerscope.services.fiscal_calendar import quarter_for
from app.dealerscope.services.goals import RockService
from app.dealerscope.services.scorecard import ScorecardService
from app.dealerscope.services.todos import TodoService

router = APIRouter()


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "")


def _period_or_current(year: int | None, quarter: int | None) -> tuple[int, int]:
    if year is not None and quarter is not None:
        return year, quarter
    current = quarter_for(date.today())
    return (year if year is not None else current.year, quarter if quarter is not None else current.quarter)


def _kpi_item(kpi) -> KpiItem:
    return KpiItem(
        id=str(kpi.id),
        department_id=str(kpi.department_id),
        name=kpi.name,
        metric_type=kpi.metric_type,
        target_value=kpi.target_value,
        target_direction=kpi.target_direction,
        display_order=kpi.display_order,
    )


def _todo_response(todo, trace_id: str) -> TodoResponse:
    return TodoResponse(
        id=str(todo.id),
        department_id=str(todo.department_id),
        title=todo.title,
        status=todo.status,
        due_date=todo.due_date,
        trace_id=trace_id,
    )


@router.get("/departments/{department_id}/kpis", response_model=KpiListResponse)
async def list_kpis(request: Request, department_id: str, user=Depends(require_active_user), db=Depends(get_db)):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    kpis = ScorecardService(db).list_kpis(department.id)
    return KpiListResponse(
        department_id=str(department.id),
        kpis=[_kpi_item(kpi) for kpi in kpis],
        trace_id=_trace_id(request),
    )


@router.post("/departments/{department_id}/kpis", response_model=KpiItem, status_code=201)
async def create_kpi(
    department_id: str,
    payload: KpiCreateRequest,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    values = payload.model_dump()
    values["assigned_to"] = as_uuid(values.get("assigned_to"))
    kpi = ScorecardService(db).create_kpi(department, **values)
    return _kpi_item(kpi)


@router.get("/departments/{department_id}/kpi-status", response_model=KpiStatusResponse)
async def kpi_status(
    request: Request,
    department_id: str,
    year: int | None = Query(default=None, ge=2000, le=2100),
    quarter: int | None = Query(default=None, ge=1, le=4),
    granularity: str = Query(default="weekly", pattern="^(weekly|monthly)$"),
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    year, quarter = _period_or_current(year, quarter)
    summary = ScorecardService(db).kpi_status(department.id, year=year, quarter=quarter, granularity=granularity)
    return KpiStatusResponse(
        department_id=summary.department_id,
        year=summary.year,
        quarter=summary.quarter,
        granularity=summary.granularity,
        counts=KpiStatusCounts(**summary.counts),
        items=[
            KpiStatusItemResponse(
                kpi_id=item.kpi_id,
                name=item.name,
                status=item.status.value,
                actual_value=item.actual_value,
                target_value=item.target_value,
                variance=item.variance,
                period_key=item.period_key,
            )
            for item in summary.items
        ],
        trace_id=_trace_id(request),
    )


@router.put("/kpis/{kpi_id}/entries", response_model=ScorecardEntryResponse)
async def upsert_scorecard_entry(
    request: Request,
    kpi_id: str,
    payload: ScorecardEntryRequest,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    service = ScorecardService(db)
    kpi = service.get_kpi(kpi_id)
    DepartmentScopeService(db).ensure_department(user, kpi.department_id)
    entry = service.upsert_entry(
        kpi,
        actual_value=payload.actual_value,
        week_start_date=payload.week_start_date,
        month=payload.month,
        notes=payload.notes,
        user_id=user.id,
    )
    return ScorecardEntryResponse(
        id=str(entry.id),
        kpi_id=str(entry.kpi_id),
        entry_type=entry.entry_type,
        week_start_date=entry.week_start_date,
        month=entry.month,
        actual_value=entry.actual_value,
        variance=entry.variance,
        status=entry.status,
        trace_id=_trace_id(request),
    )


@router.get("/departments/{department_id}/rock-counts", response_model=RockCountsResponse)
async def rock_counts(
    request: Request,
    department_id: str,
    year: int | None = Query(default=None, ge=2000, le=2100),
    quarter: int | None = Query(default=None, ge=1, le=4),
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    year, quarter = _period_or_current(year, quarter)
    counts = RockService(db).counts(department.id, year=year, quarter=quarter)
    return RockCountsResponse(department_id=str(department.id), trace_id=_trace_id(request), **counts)


@router.post("/departments/{department_id}/rocks", response_model=RockResponse, status_code=201)
async def create_rock(
    request: Request,
    department_id: str,
    payload: RockCreateRequest,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    rock = RockService(db).create(department, assigned_to=user.id, **payload.model_dump())
    return RockResponse(
        id=str(rock.id),
        department_id=str(rock.department_id),
        title=rock.title,
        quarter=rock.quarter,
        year=rock.year,
        status=rock.status,
        progress_percentage=rock.progress_percentage,
        trace_id=_trace_id(request),
    )


@router.get("/departments/{department_id}/todo-counts", response_model=TodoCountsResponse)
async def todo_counts(request: Request, department_id: str, user=Depends(require_active_user), db=Depends(get_db)):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    counts = TodoService(db).counts(department.id)
    return TodoCountsResponse(department_id=str(department.id), trace_id=_trace_id(request), **counts)


@router.post("/departments/{department_id}/todos", response_model=TodoResponse, status_code=201)
async def create_todo(
    request: Request,
    department_id: str,
    payload: TodoCreateRequest,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    department = DepartmentScopeService(db).ensure_department(user, department_id)
    todo = TodoService(db).create(department, created_by=user.id, **payload.model_dump())
    return _todo_response(todo, _trace_id(request))


@router.patch("/todos/{todo_id}", response_model=TodoResponse)
async def update_todo(
    request: Request,
    todo_id: str,
    payload: TodoUpdateRequest,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    service = TodoService(db)
    todo = service.get(todo_id)
    DepartmentScopeService(db).ensure_department(user, todo.department_id)
    todo = service.update(todo, **payload.model_dump(exclude_unset=True))
    return _todo_response(todo, _trace_id(request))
