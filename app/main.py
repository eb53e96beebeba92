from fastapi import FastAPI

from app.dealerscope.api import api_router
from app.dealerscope.core.config import settings
from app.dealerscope.core.errors import setup_exception_handlers
from app.dealerscope.core.logging import configure_logging
from app.dealerscope.middleware.observability import ObservabilityMiddleware
from app.dealerscope.middleware.session_context import SessionContextMiddleware
from app.dealerscope.middleware.trace import TraceIdMiddleware


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(SessionContextMiddleware)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
