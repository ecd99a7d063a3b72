from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from app.core.config import Settings, settings as default_settings
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import install_middleware
from app.services.forwarding.gateway import ForwardingGateway

from app.api.routes.health import router as health_router
from app.api.routes.forward import router as forward_router

logger = setup_logging(default_settings.LOG_LEVEL)

def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[ForwardingGateway] = None,
) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for name in ("N8N_WEBHOOK_URL", "N8N_NOTES_WEBHOOK_URL"):
            if not getattr(settings, name):
                logger.warning("{} not set, its route will answer 500", name)
        logger.info("API on http://localhost:{}", settings.PORT)
        yield

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway or ForwardingGateway(settings)

    install_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(forward_router)

    return app

app = create_app()
