"""
Integration tests for the HTTP boundary.

Tests cover:
- caller identity from the Authorization header
- registration and read endpoints
- batch membership endpoints and error mapping
- event replay
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from conftest import ORG_ONE, ORG_TWO, REGULAR_ONE, REGULAR_TWO, bearer


@pytest.mark.asyncio
async def test_register_requires_caller(client: AsyncClient):
    response = await client.put("/api/v1/users/me", json={"role": "regular"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_rejects_malformed_header(client: AsyncClient):
    response = await client.put(
        "/api/v1/users/me", json={"role": "regular"}, headers={"Authorization": "Token abc"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_and_read_user(client: AsyncClient):
    response = await client.put(
        "/api/v1/users/me", json={"role": "regular", "profile_ref": "QmNew"}, headers=bearer("0xnew")
    )
    assert response.status_code == 200
    assert response.json() == {"identity": "0xnew", "role": "regular", "profile_ref": "QmNew", "members": []}

    response = await client.get("/api/v1/users/0xnew")
    assert response.json()["profile_ref"] == "QmNew"


@pytest.mark.asyncio
async def test_register_with_none_role_is_validation_error(client: AsyncClient):
    response = await client.put("/api/v1/users/me", json={"role": "none"}, headers=bearer("0xnew"))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_role_change_rejected(client: AsyncClient):
    response = await client.put(
        "/api/v1/users/me", json={"role": "organization"}, headers=bearer(REGULAR_ONE)
    )
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "invalid_role"


@pytest.mark.asyncio
async def test_unregistered_user_reads_as_none(client: AsyncClient):
    response = await client.get("/api/v1/users/0xghost")
    assert response.status_code == 200
    assert response.json()["role"] == "none"


@pytest.mark.asyncio
async def test_add_members_and_read_membership(client: AsyncClient):
    response = await client.post(
        "/api/v1/organization/members",
        json={"identities": [REGULAR_ONE, REGULAR_TWO]},
        headers=bearer(ORG_ONE),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["organization"] == ORG_ONE
    assert body["members"] == [REGULAR_ONE, REGULAR_TWO]

    response = await client.get(f"/api/v1/users/{REGULAR_TWO}/membership")
    assert response.json() == {
        "identity": REGULAR_TWO,
        "member_of": ORG_ONE,
        "manager_of": None,
        "member_index": 1,
    }

    response = await client.get(f"/api/v1/users/{ORG_ONE}")
    assert response.json()["members"] == [REGULAR_ONE, REGULAR_TWO]


@pytest.mark.asyncio
async def test_conflicting_affiliation_maps_to_409(client: AsyncClient):
    await client.post(
        "/api/v1/organization/members", json={"identities": [REGULAR_ONE]}, headers=bearer(ORG_ONE)
    )
    response = await client.post(
        "/api/v1/organization/members", json={"identities": [REGULAR_ONE]}, headers=bearer(ORG_TWO)
    )
    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "conflicting_affiliation"
    assert error["details"]["identity"] == REGULAR_ONE


@pytest.mark.asyncio
async def test_unauthorized_maps_to_403(client: AsyncClient):
    response = await client.post(
        "/api/v1/organization/members", json={"identities": [REGULAR_TWO]}, headers=bearer(REGULAR_ONE)
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "unauthorized"


@pytest.mark.asyncio
async def test_manager_flow(client: AsyncClient):
    await client.post(
        "/api/v1/organization/members",
        json={"identities": [REGULAR_ONE, REGULAR_TWO]},
        headers=bearer(ORG_ONE),
    )
    response = await client.post(
        "/api/v1/organization/managers", json={"identities": [REGULAR_ONE]}, headers=bearer(ORG_ONE)
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/v1/organization/members/remove",
        json={"identities": [REGULAR_TWO]},
        headers=bearer(REGULAR_ONE),
    )
    assert response.status_code == 200
    assert response.json()["members"] == [REGULAR_ONE]

    response = await client.post(
        "/api/v1/organization/managers/remove",
        json={"identities": [REGULAR_ONE]},
        headers=bearer(ORG_ONE),
    )
    assert response.status_code == 200

    response = await client.get(f"/api/v1/users/{REGULAR_ONE}/membership")
    assert response.json()["manager_of"] is None
    assert response.json()["member_of"] == ORG_ONE


@pytest.mark.asyncio
async def test_remove_non_member_maps_to_404(client: AsyncClient):
    await client.post(
        "/api/v1/organization/members", json={"identities": [REGULAR_ONE]}, headers=bearer(ORG_ONE)
    )
    response = await client.post(
        "/api/v1/organization/members/remove",
        json={"identities": [REGULAR_TWO]},
        headers=bearer(ORG_ONE),
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
async def test_delete_organization(client: AsyncClient):
    await client.post(
        "/api/v1/organization/members",
        json={"identities": [REGULAR_ONE, REGULAR_TWO]},
        headers=bearer(ORG_ONE),
    )

    response = await client.delete("/api/v1/organization", headers=bearer(REGULAR_ONE))
    assert response.status_code == 403

    response = await client.delete("/api/v1/organization", headers=bearer(ORG_ONE))
    assert response.status_code == 200
    assert sorted(response.json()["identities"]) == sorted([REGULAR_ONE, REGULAR_TWO])

    response = await client.get(f"/api/v1/users/{ORG_ONE}")
    assert response.json() == {"identity": ORG_ONE, "role": "none", "profile_ref": "", "members": []}


@pytest.mark.asyncio
async def test_event_replay(client: AsyncClient):
    response = await client.get("/api/v1/events")
    start = response.json()["last_sequence"]
    assert start == 4  # the four fixture registrations

    await client.post(
        "/api/v1/organization/members", json={"identities": [REGULAR_ONE]}, headers=bearer(ORG_ONE)
    )

    response = await client.get("/api/v1/events", params={"after": start})
    body = response.json()
    assert body["reset"] is False
    assert [e["type"] for e in body["data"]] == ["members.added"]
    assert body["data"][0]["organization"] == ORG_ONE


@pytest.mark.asyncio
async def test_event_replay_rejects_negative_cursor(client: AsyncClient):
    response = await client.get("/api/v1/events", params={"after": -1})
    assert response.status_code == 422
