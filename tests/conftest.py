import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the Protean config overlay before the domain is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def sickfits_bed():
    from sickfits.domain import sickfits

    bed = DomainFixture(sickfits)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(sickfits_bed):
    with sickfits_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
TEST_SECRET = "test-signing-secret"


@pytest.fixture(autouse=True)
def token_issuer():
    from sickfits.auth import reset_token_issuer, set_token_issuer
    from sickfits.auth.tokens import TokenIssuer

    issuer = TokenIssuer(secret=TEST_SECRET)
    set_token_issuer(issuer)
    yield issuer
    reset_token_issuer()


@pytest.fixture(autouse=True)
def gateway():
    from sickfits.payments.gateway import reset_gateway, set_gateway
    from sickfits.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def mailbox():
    from sickfits.notifications.channel import reset_email_channel, set_email_channel
    from sickfits.notifications.channel.fake_email import FakeEmailAdapter

    fake = FakeEmailAdapter(sender="no-reply@sickfits.test")
    set_email_channel(fake)
    yield fake
    reset_email_channel()


# ---------------------------------------------------------------------------
# Data builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    """Create and persist a user; returns the User aggregate."""
    from protean import current_domain

    from sickfits.auth.credentials import hash_password
    from sickfits.auth.permissions import dump_permissions, parse_permissions
    from sickfits.user.user import User

    def _make(email="shopper@example.com", password="secret123", name="Shopper", permissions=("USER",)):
        user = User.sign_up(email=email, password_hash=hash_password(password), name=name)
        user.permissions = dump_permissions(parse_permissions(permissions))
        current_domain.repository_for(User).add(user)
        return user

    return _make


@pytest.fixture()
def shopper(make_user):
    return make_user()


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@example.com", name="Admin", permissions=("USER", "ADMIN"))


@pytest.fixture()
def make_item():
    """Create and persist a catalogue item; returns the Item aggregate."""
    from protean import current_domain

    from sickfits.catalogue.item import Item

    def _make(owner, title="Fancy Hat", price=1000, description="A very fancy hat"):
        item = Item.create(
            user_id=str(owner.id),
            title=title,
            description=description,
            price=price,
            image="hat.jpg",
            large_image="hat-large.jpg",
        )
        current_domain.repository_for(Item).add(item)
        return item

    return _make
