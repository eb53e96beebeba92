from fastapi import APIRouter

from app.dealerscope.routers.auth import router as auth_router
from app.dealerscope.routers.dashboard import router as dashboard_router
from app.dealerscope.routers.health import router as health_router
from app.dealerscope.routers.profile import router as profile_router
from app.dealerscope.routers.scope import router as scope_router

API_PREFIX = "/dealerscope"

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router, prefix=f"{API_PREFIX}/auth", tags=["auth"])
api_router.include_router(profile_router, prefix=API_PREFIX, tags=["profile"])
api_router.include_router(scope_router, prefix=f"{API_PREFIX}/scope", tags=["scope"])
api_router.include_router(dashboard_router, prefix=API_PREFIX, tags=["dashboard"])
