"""Tests for name resolution."""

from __future__ import annotations

import pytest

from spacectl.domain.errors import NotFoundError
from spacectl.domain.models import SessionContext
from spacectl.services.resolve import (
    RESOLVERS,
    ResourceKind,
    resolve_by_name,
    resolve_organization,
    resolve_space,
    resolve_space_or_current,
)
from tests.conftest import RecordingPlatform, recording_platform


@pytest.fixture
def client() -> RecordingPlatform:
    client = recording_platform()
    org = client.organizations["acme"]
    client.add_space(org, "dev", apps=["web"], instances=["db"])
    client.add_space(org, "prod")
    other = client.add_organization("other")
    client.add_space(other, "dev")
    return client


class TestResolveSpace:
    def test_every_space_resolves_to_itself(self, client: RecordingPlatform) -> None:
        for org in client.organizations.values():
            for space in client.organization_spaces(org):
                assert resolve_space(client, space.name, org) == space

    def test_scoped_to_organization(self, client: RecordingPlatform) -> None:
        other = client.organizations["other"]
        assert resolve_space(client, "dev", other).organization == other

    def test_missing_space(self, client: RecordingPlatform) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            resolve_space(client, "prod", client.organizations["other"])
        assert excinfo.value.kind == "space"
        assert excinfo.value.name == "prod"

    def test_exact_match_only(self, client: RecordingPlatform) -> None:
        with pytest.raises(NotFoundError):
            resolve_space(client, "de", client.organizations["acme"])


class TestResolveByName:
    def test_only_organizations_resolve_globally(self) -> None:
        assert set(RESOLVERS) == {ResourceKind.ORGANIZATION}

    def test_found(self, client: RecordingPlatform) -> None:
        found = resolve_by_name(client, ResourceKind.ORGANIZATION, "acme")
        assert found == client.organizations["acme"]

    def test_not_found(self, client: RecordingPlatform) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            resolve_by_name(client, ResourceKind.ORGANIZATION, "ghost")
        assert excinfo.value.kind == "organization"


class TestDefaults:
    def test_organization_falls_back_to_session(self, client: RecordingPlatform) -> None:
        org = client.organizations["acme"]
        assert resolve_organization(client, None, SessionContext(organization=org)) == org

    def test_organization_unset(self, client: RecordingPlatform) -> None:
        assert resolve_organization(client, None, SessionContext()) is None

    def test_named_organization_wins(self, client: RecordingPlatform) -> None:
        session = SessionContext(organization=client.organizations["acme"])
        assert resolve_organization(client, "other", session) == client.organizations["other"]

    def test_space_falls_back_to_session(self, client: RecordingPlatform) -> None:
        org = client.organizations["acme"]
        prod = resolve_space(client, "prod", org)
        session = SessionContext(organization=org, space=prod)
        assert resolve_space_or_current(client, None, org, session) == prod

    def test_space_unset(self, client: RecordingPlatform) -> None:
        assert resolve_space_or_current(client, None, None, SessionContext()) is None

    def test_named_space_needs_organization(self, client: RecordingPlatform) -> None:
        with pytest.raises(NotFoundError):
            resolve_space_or_current(client, "dev", None, SessionContext())
