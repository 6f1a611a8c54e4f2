"""AI-powered product descriptions and shopping chat"""

from openai import AsyncOpenAI
from typing import Any, Dict, List, Optional
import asyncio
import logging

from shopperz.core.config import Settings
from shopperz.core.monitoring import assistant_requests
from shopperz.models import ChatMessage, ChatRole, Product
from shopperz.utils.helpers import format_price

logger = logging.getLogger(__name__)

DESCRIPTION_NO_KEY = "API Key missing. Please configure your environment."
DESCRIPTION_EMPTY = "Could not generate description."
DESCRIPTION_ERROR = "Error generating description. Please try again."

CHAT_NO_KEY = "I'm sorry, I can't chat right now (API Key missing)."
CHAT_EMPTY = "I didn't catch that."
CHAT_ERROR = "I'm having trouble connecting to my brain right now. Try again later!"

ASSISTANT_NAME = "Xr Ai"
SHOP_NAME = "ShopperzStop"

class ShoppingAssistant:
    """
    Text generation collaborator for the admin console and the shopping chat.

    Both operations always return text: missing credentials, timeouts and
    API errors are turned into fixed fallback messages.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        timeout_seconds: float = 15.0,
        max_tokens: int = 300,
        client: Optional[Any] = None
    ):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens
        self.client = client
        # Injected clients belong to the caller
        self._owns_client = False
        if self.client is None and api_key:
            self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)
            self._owns_client = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShoppingAssistant":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.AI_MODEL,
            timeout_seconds=settings.AI_TIMEOUT_SECONDS,
            max_tokens=settings.AI_MAX_TOKENS,
        )

    async def close(self) -> None:
        """Release the HTTP connections of a client this assistant created"""
        if self._owns_client and self.client is not None:
            await self.client.close()
            self._owns_client = False

    async def _complete(self, messages: List[Dict[str, str]], temperature: float) -> str:
        response = await asyncio.wait_for(
            self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=self.max_tokens
            ),
            timeout=self.timeout_seconds
        )
        content = response.choices[0].message.content if response.choices else None
        return (content or "").strip()

    async def generate_description(self, name: str, category: str, features: str) -> str:
        """Short marketing description for a product"""
        if self.client is None:
            return DESCRIPTION_NO_KEY

        prompt = f"""
        Write a compelling, marketing-focused product description for a product named "{name}" in the category "{category}".
        Key features to include: {features}.
        Keep it under 60 words. Tone: Professional yet exciting.
        """

        try:
            text = await self._complete(
                [
                    {"role": "system", "content": "You are an e-commerce copywriter."},
                    {"role": "user", "content": prompt}
                ],
                temperature=0.7
            )
        except Exception as e:
            assistant_requests.labels(operation="description", outcome="error").inc()
            logger.error(f"Description generation error: {str(e)}")
            return DESCRIPTION_ERROR

        if not text:
            assistant_requests.labels(operation="description", outcome="empty").inc()
            return DESCRIPTION_EMPTY

        assistant_requests.labels(operation="description", outcome="ok").inc()
        return text

    def build_system_prompt(self, catalog: List[Product]) -> str:
        """System instruction grounding the assistant in the current catalog"""
        product_catalog = "\n".join(
            f"- {p.name} ({format_price(p.price)}): {p.description}" for p in catalog
        )
        return f"""
        You are "{ASSISTANT_NAME}", a helpful shopping assistant for {SHOP_NAME}.
        Here is our current product catalog:
        {product_catalog}

        Your goal is to help customers find products, compare them, and answer questions.
        Be concise, friendly, and enthusiastic.
        If a user asks about a product not in the catalog, politely say we don't carry it yet.
        Always recommend specific products from the list when relevant.
        """

    async def chat(self, history: List[ChatMessage], message: str, catalog: List[Product]) -> str:
        """Reply to the shopper, grounded in the catalog"""
        if self.client is None:
            return CHAT_NO_KEY

        messages = [{"role": "system", "content": self.build_system_prompt(catalog)}]
        for entry in history:
            role = "assistant" if entry.role == ChatRole.MODEL else "user"
            messages.append({"role": role, "content": entry.text})
        messages.append({"role": "user", "content": message})

        try:
            text = await self._complete(messages, temperature=0.5)
        except Exception as e:
            assistant_requests.labels(operation="chat", outcome="error").inc()
            logger.error(f"Shopping chat error: {str(e)}")
            return CHAT_ERROR

        if not text:
            assistant_requests.labels(operation="chat", outcome="empty").inc()
            return CHAT_EMPTY

        assistant_requests.labels(operation="chat", outcome="ok").inc()
        return text
