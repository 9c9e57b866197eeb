"""Tests for SpaceService.take_or_create."""

from __future__ import annotations

from spacectl.services.space import SpaceService
from tests.conftest import recording_platform


class TestTakeOrCreate:
    def test_existing_space_is_targeted(self) -> None:
        client = recording_platform()
        org = client.organizations["acme"]
        client.add_space(org, "dev")

        result = SpaceService(client).take_or_create("dev")

        assert result.ok
        assert result.op == "take_space"
        assert result.data["created"] is False
        assert result.data["space"] == "dev"
        assert client.mutations("create_space") == []
        assert client.mutations("set_target") == [("set_target", "acme", "dev")]

    def test_missing_space_is_created_and_targeted(self) -> None:
        client = recording_platform()

        result = SpaceService(client).take_or_create("dev")

        assert result.ok
        assert result.op == "take_space"
        assert result.data["created"] is True
        assert result.data["targeted"] is True
        assert client.mutations("create_space", "set_target") == [
            ("create_space", "dev"),
            ("set_target", "acme", "dev"),
        ]

    def test_idempotent(self) -> None:
        client = recording_platform()

        first = SpaceService(client).take_or_create("dev")
        second = SpaceService(client).take_or_create("dev")

        assert first.ok and second.ok
        assert second.data["created"] is False
        assert client.mutations("create_space") == [("create_space", "dev")]
        assert client.current_space() is not None
        assert client.current_space().name == "dev"

    def test_lookup_is_scoped_to_current_organization(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "dev")

        result = SpaceService(client).take_or_create("dev")

        assert result.data["created"] is True
        assert result.data["organization"] == "acme"

    def test_without_organization_finds_space_anywhere(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "dev")
        client.current = (None, None)

        result = SpaceService(client).take_or_create("dev")

        assert result.data["created"] is False
        assert client.mutations("set_target") == [("set_target", "other", "dev")]

    def test_create_failure_keeps_op(self) -> None:
        client = recording_platform()
        client.fail("create_space", "dev")

        result = SpaceService(client).take_or_create("dev")

        assert not result.ok
        assert result.op == "take_space"
        assert result.error is not None
        assert result.error.code == "PLATFORM_ERROR"
