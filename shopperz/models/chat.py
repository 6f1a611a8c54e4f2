"""Shopping assistant conversation model"""

from datetime import datetime, timezone
from pydantic import Field
import enum
import uuid

from .base import EntityModel

class ChatRole(str, enum.Enum):
    USER = "user"
    MODEL = "model"

class ChatMessage(EntityModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
