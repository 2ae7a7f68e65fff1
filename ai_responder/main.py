from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from ai_responder.api.router import api_router
from ai_responder.api.routers.health import router as health_router
from ai_responder.core.logging import configure_logging
from ai_responder.core.settings import get_settings
from ai_responder.dependency_injection import build_container
from ai_responder.services.contracts import ChatBackendProtocol, ResponderServiceProtocol

settings = get_settings()
configure_logging(settings.effective_log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting ai responder", extra={"app_env": settings.app_env})

    container = build_container(settings)
    responder = container.resolve(ResponderServiceProtocol)
    chat_backend = container.resolve(ChatBackendProtocol)
    logger.info("responder service initialized", extra={"chat_backend": type(chat_backend).__name__})

    app.state.settings = settings
    app.state.container = container

    try:
        yield
    finally:
        await responder.aclose()
        await chat_backend.aclose()
        logger.info("ai responder shutdown complete")


app = FastAPI(
    title="AI Responder",
    version="0.1.0",
    docs_url="/docs" if settings.enable_swagger else None,
    redoc_url="/redoc" if settings.enable_swagger else None,
    openapi_url="/openapi.json" if settings.enable_swagger else None,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(api_router, prefix="/api")
