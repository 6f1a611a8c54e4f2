"""
Shopping assistant chat routes
"""

from fastapi import APIRouter, Depends

from shopperz.api.dependencies import get_assistant, get_store
from shopperz.models import ChatMessage, ChatRole
from shopperz.schemas.assistant import ChatRequest, ChatResponse
from shopperz.services.assistant import ShoppingAssistant
from shopperz.services.store import Store

router = APIRouter()

@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Chat with the shopping assistant",
    description="Answers questions about the current catalog"
)
async def chat(
    payload: ChatRequest,
    assistant: ShoppingAssistant = Depends(get_assistant),
    store: Store = Depends(get_store)
):
    text = await assistant.chat(payload.history, payload.message, store.get_products())
    return ChatResponse(reply=ChatMessage(role=ChatRole.MODEL, text=text))
