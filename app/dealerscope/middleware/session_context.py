from jose import JWTError
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.dealerscope.core.security import read_session_token


class SessionContextMiddleware(BaseHTTPMiddleware):
    """Expose the bearer token's identity on ``request.state`` for logging.

    Authorization still happens in the route dependencies; an unreadable token
    only leaves the context empty here.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.user_id = None
        request.state.store_id = None
        request.state.store_group_id = None
        request.state.role = None

        auth_header = request.headers.get("Authorization") or ""
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() == "bearer" and token:
            try:
                token_data = read_session_token(token.strip())
            except (JWTError, ValidationError):
                token_data = None
            if token_data is not None:
                request.state.user_id = token_data.sub
                request.state.store_id = token_data.store_id
                request.state.store_group_id = token_data.store_group_id
                request.state.role = token_data.role

        return await call_next(request)
