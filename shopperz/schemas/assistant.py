"""Shopping assistant chat schemas"""

from typing import List
from pydantic import Field

from shopperz.models import ChatMessage
from .base import BaseSchema

class ChatRequest(BaseSchema):
    history: List[ChatMessage] = []
    message: str = Field(..., min_length=1)

class ChatResponse(BaseSchema):
    reply: ChatMessage
