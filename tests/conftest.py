"""Shared fixtures: a store over in-memory storage and an API client around it"""

from types import SimpleNamespace
import asyncio

import pytest
from fastapi.testclient import TestClient

from shopperz.core.config import Settings
from shopperz.core.storage import MemoryStorage
from shopperz.main import create_app
from shopperz.models import Category, Product
from shopperz.schemas.order import CheckoutForm
from shopperz.services.assistant import ShoppingAssistant
from shopperz.services.context import build_context
from shopperz.services.notification import NotificationChannel
from shopperz.services.store import Store


class FakeCompletions:
    """Stands in for client.chat.completions of the OpenAI SDK"""

    def __init__(self, reply="", error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(**kwargs):
    completions = FakeCompletions(**kwargs)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def notifications():
    return NotificationChannel()


@pytest.fixture
def notices(notifications):
    received = []
    notifications.subscribe(received.append)
    return received


@pytest.fixture
def lamp():
    return Product(
        id="lamp01",
        name="Arc Floor Lamp",
        price=80.0,
        description="Warm light",
        category=Category.HOME.value,
    )


@pytest.fixture
def mat():
    return Product(
        id="mat01",
        name="Pro-Grip Yoga Mat",
        price=45.0,
        description="Non-slip",
        category=Category.SPORTS.value,
    )


@pytest.fixture
def store(storage, notifications, lamp, mat):
    return Store(storage, notifications, products=[lamp, mat])


@pytest.fixture
def checkout_form():
    return CheckoutForm(
        name="Dana Reyes",
        email="dana@example.com",
        address="12 Harbor Road",
        city="Portsmouth",
        zip="03801",
        card_name="Dana Reyes",
        card_number="4242424242424242",
        exp_date="12/30",
        cvv="123",
    )


@pytest.fixture
def checkout_payload():
    return {
        "name": "Dana Reyes",
        "email": "dana@example.com",
        "address": "12 Harbor Road",
        "city": "Portsmouth",
        "zip": "03801",
        "cardName": "Dana Reyes",
        "cardNumber": "4242424242424242",
        "expDate": "12/30",
        "cvv": "123",
    }


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        STORAGE_BACKEND="memory",
        CHECKOUT_DELAY_SECONDS=0,
        OPENAI_API_KEY=None,
        ADMIN_USERNAME="xrrahul",
        ADMIN_PASSWORD="xr123",
        ORDER_STRICT_TRANSITIONS=False,
    )


@pytest.fixture
def context(settings, storage):
    return build_context(settings, storage=storage, assistant=ShoppingAssistant(api_key=None))


@pytest.fixture
def client(context):
    app = create_app(context=context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/v1/admin/login",
        json={"username": "XrRahul ", "password": "xr123"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
