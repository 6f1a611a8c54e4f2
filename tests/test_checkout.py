import asyncio

import pytest

from shopperz.core.exceptions import BadRequestException, EmptyCartException
from shopperz.models import OrderStatus
from shopperz.services.checkout import CheckoutService, CheckoutStatus


@pytest.mark.asyncio
async def test_checkout_places_order_and_clears_cart(store, lamp, mat, checkout_form):
    store.add_to_cart(lamp)
    store.add_to_cart(lamp)
    store.add_to_cart(mat)
    checkout = CheckoutService(store, delay_seconds=0)

    order = await checkout.checkout(checkout_form)

    assert order.total == pytest.approx(205.0)
    assert order.item_count == 3
    assert order.customer_name == "Dana Reyes"
    assert order.status == OrderStatus.PROCESSING
    assert store.get_orders()[0].id == order.id
    assert store.get_cart() == []


@pytest.mark.asyncio
async def test_empty_cart_is_rejected(store, checkout_form):
    with pytest.raises(EmptyCartException):
        await CheckoutService(store, delay_seconds=0).submit(checkout_form)


@pytest.mark.asyncio
async def test_cancel_before_commit_places_nothing(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=10)

    session = await checkout.submit(checkout_form)
    assert session.status == CheckoutStatus.PROCESSING

    assert checkout.cancel(session.id) is True
    await session.wait()

    assert session.status == CheckoutStatus.CANCELLED
    assert session.order is None
    assert store.get_orders() == []
    assert store.get_cart_count() == 1


@pytest.mark.asyncio
async def test_cancel_after_commit_is_refused(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=0)

    session = await checkout.submit(checkout_form)
    await session.wait()

    assert session.status == CheckoutStatus.COMPLETED
    assert checkout.cancel(session.id) is False
    assert checkout.cancel("unknown") is False
    assert len(store.get_orders()) == 1


@pytest.mark.asyncio
async def test_cart_is_snapshotted_at_submission(store, lamp, mat, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=0.05)

    session = await checkout.submit(checkout_form)
    store.add_to_cart(mat)
    await session.wait()

    assert [item.id for item in session.order.items] == [lamp.id]
    assert session.order.total == pytest.approx(80.0)


@pytest.mark.asyncio
async def test_checkout_reports_cancellation(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=10)

    pending = asyncio.ensure_future(checkout.checkout(checkout_form))
    await asyncio.sleep(0)
    session = next(iter(checkout._sessions.values()))
    checkout.cancel(session.id)

    with pytest.raises(BadRequestException):
        await pending


@pytest.mark.asyncio
async def test_shutdown_cancels_pending_sessions(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=10)
    session = await checkout.submit(checkout_form)

    await checkout.shutdown()

    assert session.status == CheckoutStatus.CANCELLED
    assert store.get_orders() == []


@pytest.mark.asyncio
async def test_sessions_never_keep_card_fields(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=0)

    order = await checkout.checkout(checkout_form)

    for session in checkout._sessions.values():
        assert not hasattr(session, "form")
        kept = session.details.model_dump()
        assert "card_number" not in kept and "cvv" not in kept
        assert checkout_form.card_number not in repr(vars(session))
    assert order.city == "Portsmouth"


@pytest.mark.asyncio
async def test_finished_sessions_are_pruned(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=0, retention_seconds=0)

    first = await checkout.submit(checkout_form)
    await first.wait()
    store.add_to_cart(lamp)
    second = await checkout.submit(checkout_form)

    assert checkout.get_session(first.id) is None
    assert checkout.get_session(second.id) is second

    await second.wait()
    assert checkout.prune() == 1
    assert checkout._sessions == {}


@pytest.mark.asyncio
async def test_pending_sessions_survive_pruning(store, lamp, checkout_form):
    store.add_to_cart(lamp)
    checkout = CheckoutService(store, delay_seconds=10, retention_seconds=0)
    session = await checkout.submit(checkout_form)

    assert checkout.prune() == 0
    assert checkout.get_session(session.id) is session

    await checkout.shutdown()
