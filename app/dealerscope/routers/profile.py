from fastapi import APIRouter, Depends, Request

from app.dealerscope.core.deps import get_current_token_data
from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.db.session import get_db
from app.dealerscope.repos.users import UserRepository
from app.dealerscope.schemas.errors import ApiErrorResponse
from app.dealerscope.schemas.profile import ProfileResponse

router = APIRouter()


@router.get(
    "/me/profile",
    response_model=ProfileResponse,
    responses={404: {"description": "Profile not found", "model": ApiErrorResponse}},
)
async def me_profile(request: Request, token_data=Depends(get_current_token_data), db=Depends(get_db)):
    user = UserRepository(db).get_by_id(token_data.sub)
    if user is None:
        raise AppError(ErrorCatalog.PROFILE_NOT_FOUND, details={"user_id": token_data.sub})
    if not user.is_active:
        raise AppError(ErrorCatalog.USER_INACTIVE)
    return ProfileResponse(
        id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        store_id=str(user.store_id) if user.store_id else None,
        store_group_id=str(user.store_group_id) if user.store_group_id else None,
        is_active=user.is_active,
        trace_id=getattr(request.state, "trace_id", ""),
    )
