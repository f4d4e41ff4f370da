import pytest
from protean.integrations.pytest import DomainFixture


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

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _adapters():
    """Run every test against fake adapters and a fresh cart store."""
    from storefront.carrier import reset_carrier, set_carrier
    from storefront.carrier.fake_adapter import FakeCarrier
    from storefront.cart.store import reset_cart_store
    from storefront.messaging import reset_messenger, set_messenger
    from storefront.messaging.fake_adapter import FakeMessenger

    set_carrier(FakeCarrier())
    set_messenger(FakeMessenger())
    yield
    reset_carrier()
    reset_messenger()
    reset_cart_store()


@pytest.fixture()
def carrier():
    from storefront.carrier import get_carrier

    return get_carrier()


@pytest.fixture()
def messenger():
    from storefront.messaging import get_messenger

    return get_messenger()


@pytest.fixture()
def seller():
    from protean import current_domain
    from storefront.seller.seller import Seller

    seller = Seller.register(
        shop_name="Baan Khanom",
        shop_slug="baan-khanom",
        phone="0812345678",
        promptpay_id="0812345678",
        pickup_address="123 Sukhumvit Road, Khlong Toei, Bangkok 10110",
    )
    return current_domain.repository_for(Seller).add(seller)


@pytest.fixture()
def products(seller):
    from protean import current_domain
    from storefront.product.product import Product

    repo = current_domain.repository_for(Product)
    cake = repo.add(Product.create(seller_id=str(seller.id), name="Pandan Cake", price=150))
    cookies = repo.add(Product.create(seller_id=str(seller.id), name="Butter Cookies", price=100))
    return {"cake": cake, "cookies": cookies}
