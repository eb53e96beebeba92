from pydantic import BaseModel


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    store_id: str | None = None
    store_group_id: str | None = None
    is_active: bool
    trace_id: str
