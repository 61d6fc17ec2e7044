import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def checkout_bed():
    from checkout.domain import checkout

    bed = DomainFixture(checkout)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(checkout_bed):
    from checkout.catalogue import reset_catalogue
    from checkout.directory import reset_directory
    from checkout.gateway import reset_gateway
    from checkout.payment.verifier import reset_verifier
    from protean import current_domain

    reset_catalogue()
    reset_directory()
    reset_gateway()
    reset_verifier()

    with checkout_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def catalogue():
    """The fake catalogue, stocked with two vendors' menus."""
    from checkout.catalogue import get_catalogue

    fake = get_catalogue()
    fake.register("prod-biryani", vendor_id="vendor-spice", title="Chicken Biryani", price=100.0)
    fake.register("prod-kebab", vendor_id="vendor-spice", title="Seekh Kebab", price=250.0)
    fake.register("prod-dosa", vendor_id="vendor-south", title="Masala Dosa", price=80.0)
    return fake


@pytest.fixture()
def directory():
    """The fake shopper directory with one shopper and one saved address."""
    from checkout.directory import get_directory

    fake = get_directory()
    fake.register_shopper("user-001", name="Asha Rao", email="asha@example.com", mobile="9000000001")
    fake.register_address(
        "user-001",
        "addr-home",
        street="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        landmark="Near Metro",
        pincode="560001",
    )
    fake.register_shopper("user-002", name="Ravi Iyer", email="ravi@example.com")
    return fake


@pytest.fixture()
def gateway():
    from checkout.gateway import get_gateway

    return get_gateway()
