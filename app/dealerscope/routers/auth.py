import logging

from fastapi import APIRouter, Depends, Request

from app.dealerscope.core.error_catalog import AppError
from app.dealerscope.core.logging import log_json
from app.dealerscope.db.session import get_db
from app.dealerscope.schemas.auth import LoginRequest, TokenResponse
from app.dealerscope.services.auth import AuthService

router = APIRouter()
logger = logging.getLogger("dealerscope.auth")


@router.post("/login", response_model=TokenResponse, summary="Login (JSON)")
async def login(request: Request, payload: LoginRequest, db=Depends(get_db)):
    trace_id = getattr(request.state, "trace_id", "")
    try:
        user, token = AuthService(db).login(payload.email, payload.password)
    except AppError as exc:
        log_json(
            logger,
            {"event": "auth.login.failed", "trace_id": trace_id, "error_code": exc.error.code},
            level=logging.WARNING,
        )
        raise
    log_json(logger, {"event": "auth.login", "trace_id": trace_id, "user_id": str(user.id)})
    return TokenResponse(access_token=token, user_id=str(user.id), trace_id=trace_id)
