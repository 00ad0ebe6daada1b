"""Chat API: GET and POST /api/chat, both delegating to ChatRouter."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError

from aichat.deps import get_chat_router
from aichat.errors import RequestConstraintError
from aichat.schemas.chat import ChatRequest, ChatResponse
from aichat.services.chat_router import ChatRouter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def _query_request(
    message: str = Query("", description="Chat message, cannot be blank"),
    llm: Optional[str] = Query(None, description="Provider name, e.g. openai or ollama"),
) -> ChatRequest:
    try:
        return ChatRequest(message=message, llm=llm)
    except ValidationError as exc:
        violations = [
            f"{'.'.join(str(p) for p in err['loc']) or 'query'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise RequestConstraintError(violations) from exc


async def _process_chat(body: ChatRequest, chat_router: ChatRouter) -> ChatResponse:
    logger.info("Incoming chat request")
    return await chat_router.route(body.message, body.llm)


@router.get("/chat", response_model=ChatResponse)
async def chat_get(
    body: ChatRequest = Depends(_query_request),
    chat_router: ChatRouter = Depends(get_chat_router),
):
    """Example: GET /api/chat?message=Hello&llm=ollama"""
    return await _process_chat(body, chat_router)


@router.post("/chat", response_model=ChatResponse)
async def chat_post(
    body: ChatRequest,
    chat_router: ChatRouter = Depends(get_chat_router),
):
    """Body: {"message": "Hello", "llm": "ollama"}; llm is optional."""
    return await _process_chat(body, chat_router)
