from pydantic import BaseModel


class StoreItem(BaseModel):
    id: str
    name: str
    group_id: str | None = None
    location: str | None = None


class StoreScopeResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "stores": [{"id": "<uuid>", "name": "North", "group_id": None, "location": None}],
                "can_switch_stores": True,
                "source": "grants",
                "trace_id": "trace-123",
            }
        }
    }

    stores: list[StoreItem]
    can_switch_stores: bool
    source: str
    trace_id: str


class DepartmentItem(BaseModel):
    id: str
    store_id: str
    name: str
    department_type: str | None = None
    manager_id: str | None = None


class DepartmentScopeResponse(BaseModel):
    store_id: str
    departments: list[DepartmentItem]
    trace_id: str


def store_item(store) -> StoreItem:
    return StoreItem(
        id=str(store.id),
        name=store.name,
        group_id=str(store.group_id) if store.group_id else None,
        location=store.location,
    )


def department_item(department) -> DepartmentItem:
    return DepartmentItem(
        id=str(department.id),
        store_id=str(department.store_id),
        name=department.name,
        department_type=department.department_type,
        manager_id=str(department.manager_id) if department.manager_id else None,
    )
