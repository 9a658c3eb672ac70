"""Assistant chat endpoint."""

from fastapi import APIRouter, Depends

from yieldpilot.api.deps import get_chat_service
from yieldpilot.web.contracts.chat import ChatRequest, ChatResponse
from yieldpilot.web.services.chat_service import ChatService

router = APIRouter(prefix="/external/openai", tags=["assistant"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Forward a prompt to the chat model and return its reply."""
    return await chat_service.complete(request)
