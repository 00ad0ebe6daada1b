"""Shared FastAPI dependencies."""
from fastapi import Request

from aichat.services.chat_router import ChatRouter


def get_chat_router(request: Request) -> ChatRouter:
    """ChatRouter built in the app lifespan; shared read-only by all requests."""
    return request.app.state.chat_router
