"""
Shared fixtures: a fresh registry with two regular users and two organizations.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from membership_registry.core.store import create_store, get_manager
from membership_registry.main import app
from membership_shared.schemas.common import UserRole

REGULAR_ONE = "0xregular-one"
REGULAR_TWO = "0xregular-two"
ORG_ONE = "0xorg-one"
ORG_TWO = "0xorg-two"


@pytest.fixture
def store():
    s = create_store(event_buffer_size=50)
    s.manager.register(REGULAR_ONE, UserRole.REGULAR, "ipfsHash")
    s.manager.register(REGULAR_TWO, UserRole.REGULAR, "ipfsHash")
    s.manager.register(ORG_ONE, UserRole.ORGANIZATION, "ipfsHash")
    s.manager.register(ORG_TWO, UserRole.ORGANIZATION, "ipfsHash")
    return s


@pytest.fixture
def manager(store):
    return store.manager


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_manager] = lambda: store.manager
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(identity: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {identity}"}
