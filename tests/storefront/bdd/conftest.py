"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from pytest_bdd import given, parsers, then

from storefront import ledger
from storefront.payment.gateway import set_gateway
from storefront.payment.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def catalog():
    """Product name -> product id for products created in Given steps."""
    return {}


@pytest.fixture()
def outcome():
    """What the When step produced: an order or the error it raised."""
    return {"order": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('a product "{name}" priced {price:f} with {stock:d} units in stock'))
def _(catalog, name, price, stock):
    product = ledger.create_product(name=name, price=price, stock=stock)
    catalog[name] = product.id


@given("the payment gateway accepts charges")
def _():
    set_gateway(FakeGateway(latency=0))


@given("the payment gateway declines charges")
def _():
    gateway = FakeGateway(latency=0)
    gateway.configure(should_succeed=False, failure_reason="Card declined")
    set_gateway(gateway)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('"{name}" has {stock:d} units in stock'))
def _(catalog, name, stock):
    assert ledger.get_product(catalog[name]).stock == stock


@then(parsers.parse('the order is "{status}" and "{payment_status}"'))
def _(outcome, status, payment_status):
    assert outcome["error"] is None
    order = ledger.get_order(outcome["order"].id)
    assert order.status == status
    assert order.payment_status == payment_status


@then("no orders have been recorded")
def _():
    assert ledger.list_orders() == []
