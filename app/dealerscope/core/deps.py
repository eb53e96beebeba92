from fastapi import Depends
from jose import JWTError
from pydantic import ValidationError

from app.dealerscope.core.error_catalog import AppError, ErrorCatalog
from app.dealerscope.core.security import TokenData, oauth2_scheme, read_session_token
from app.dealerscope.db.session import get_db
from app.dealerscope.repos.users import UserRepository


def get_current_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    try:
        return read_session_token(token)
    except (JWTError, ValidationError) as exc:
        raise AppError(ErrorCatalog.INVALID_TOKEN) from exc


def get_current_user(token_data: TokenData = Depends(get_current_token_data), db=Depends(get_db)):
    # A token outliving its user row is treated like any other unusable token.
    user = UserRepository(db).get_by_id(token_data.sub)
    if user is None:
        raise AppError(ErrorCatalog.INVALID_TOKEN)
    return user


def require_active_user(user=Depends(get_current_user)):
    # Deactivation takes effect immediately, even for tokens minted while active.
    if not user.is_active:
        raise AppError(ErrorCatalog.USER_INACTIVE)
    return user
