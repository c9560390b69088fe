"""Tests for the identity registry."""

import pytest

from membership_registry.core.errors import InvalidRole, Unauthorized
from membership_registry.services.identities import IdentityRegistry
from membership_shared.schemas.common import UserRole


@pytest.fixture
def registry():
    return IdentityRegistry()


def test_register_and_get(registry: IdentityRegistry):
    record = registry.register("alice", UserRole.REGULAR, "QmProfile")
    assert record.role == UserRole.REGULAR
    assert record.profile_ref == "QmProfile"
    assert record.registered_at is not None

    assert registry.get("alice").profile_ref == "QmProfile"
    assert registry.role_of("alice") == UserRole.REGULAR
    assert registry.is_registered("alice")
    assert "alice" in registry
    assert len(registry) == 1


def test_unregistered_identity_reads_as_empty(registry: IdentityRegistry):
    record = registry.get("nobody")
    assert record.role == UserRole.NONE
    assert record.profile_ref == ""
    assert registry.role_of("nobody") == UserRole.NONE
    assert not registry.is_registered("nobody")


def test_get_returns_a_copy(registry: IdentityRegistry):
    registry.register("alice", UserRole.REGULAR, "one")
    record = registry.get("alice")
    record.profile_ref = "tampered"
    assert registry.get("alice").profile_ref == "one"


def test_reregister_same_role_updates_profile(registry: IdentityRegistry):
    registry.register("acme", UserRole.ORGANIZATION, "v1")
    registry.register("acme", UserRole.ORGANIZATION, "v2")
    assert registry.get("acme").profile_ref == "v2"
    assert registry.role_of("acme") == UserRole.ORGANIZATION


def test_reregister_with_other_role_rejected(registry: IdentityRegistry):
    registry.register("alice", UserRole.REGULAR, "v1")
    with pytest.raises(InvalidRole):
        registry.register("alice", UserRole.ORGANIZATION, "v2")
    assert registry.role_of("alice") == UserRole.REGULAR
    assert registry.get("alice").profile_ref == "v1"


def test_register_with_none_role_rejected(registry: IdentityRegistry):
    with pytest.raises(InvalidRole):
        registry.register("alice", UserRole.NONE)
    assert "alice" not in registry


def test_register_requires_identity(registry: IdentityRegistry):
    with pytest.raises(Unauthorized):
        registry.register("", UserRole.REGULAR)


def test_retired_identity_cannot_register_again(registry: IdentityRegistry):
    registry.register("acme", UserRole.ORGANIZATION, "v1")
    registry.retire("acme")

    record = registry.get("acme")
    assert record.role == UserRole.NONE
    assert record.profile_ref == ""
    assert record.is_retired
    assert not registry.is_registered("acme")

    with pytest.raises(InvalidRole):
        registry.register("acme", UserRole.ORGANIZATION, "v2")
    with pytest.raises(InvalidRole):
        registry.register("acme", UserRole.REGULAR, "v2")
