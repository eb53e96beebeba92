from fastapi import APIRouter, Depends, Request

from app.dealerscope.core.deps import require_active_user
from app.dealerscope.db.session import get_db
from app.dealerscope.schemas.errors import ApiErrorResponse
from app.dealerscope.schemas.scope import (
    DepartmentScopeResponse,
    StoreScopeResponse,
    department_item,
    store_item,
)
from app.dealerscope.services.access_scope import AccessScopeService
from app.dealerscope.services.department_scope import DepartmentScopeService

router = APIRouter()


@router.get("/stores", response_model=StoreScopeResponse)
async def list_scope_stores(request: Request, user=Depends(require_active_user), db=Depends(get_db)):
    scope = AccessScopeService(db).resolve(user)
    return StoreScopeResponse(
        stores=[store_item(store) for store in scope.stores],
        can_switch_stores=scope.can_switch_stores,
        source=scope.source,
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get(
    "/stores/{store_id}/departments",
    response_model=DepartmentScopeResponse,
    responses={403: {"description": "Store outside the caller's scope", "model": ApiErrorResponse}},
)
async def list_scope_departments(
    request: Request,
    store_id: str,
    user=Depends(require_active_user),
    db=Depends(get_db),
):
    departments = DepartmentScopeService(db).resolve_for_store(user, store_id)
    return DepartmentScopeResponse(
        store_id=store_id,
        departments=[department_item(department) for department in departments],
        trace_id=getattr(request.state, "trace_id", ""),
    )
