from fastapi import APIRouter

from ai_responder.api.routers.chat_events import router as chat_events_router
from ai_responder.api.routers.generations import router as generations_router

api_router = APIRouter()
api_router.include_router(generations_router)
api_router.include_router(chat_events_router)
