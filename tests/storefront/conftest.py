import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain

from storefront.payment.gateway import reset_gateway


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
        reset_gateway()


@pytest.fixture()
def add_product():
    """Create a product through the ledger and return it."""
    from storefront import ledger

    def _add(name="Widget", price=10.0, stock=5, **details):
        return ledger.create_product(name=name, price=price, stock=stock, **details)

    return _add


@pytest.fixture()
def widget(add_product):
    return add_product(name="Widget", price=10.0, stock=5)
