"""Tests for TargetService."""

from __future__ import annotations

from spacectl.services.target import TargetService
from tests.conftest import CannedPrompts, RecordingPlatform, recording_platform


class TestShow:
    def test_reports_session(self) -> None:
        client = recording_platform()
        result = TargetService(client).show()
        assert result.ok
        assert result.op == "target"
        assert result.data == {"organization": "acme", "space": None, "user": "dev@example.com"}

    def test_switch_without_arguments_shows(self) -> None:
        client = recording_platform()
        result = TargetService(client).switch()
        assert result.data["organization"] == "acme"
        assert client.mutations("set_target") == []


class TestSwitch:
    def test_organization_and_space(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "dev")

        result = TargetService(client).switch("other", "dev")

        assert result.ok
        assert result.data["organization"] == "other"
        assert result.data["space"] == "dev"
        assert client.mutations("set_target") == [("set_target", "other", "dev")]

    def test_space_in_current_organization(self) -> None:
        client = recording_platform()
        client.add_space(client.organizations["acme"], "prod")

        result = TargetService(client).switch(space="prod")

        assert result.data == {"organization": "acme", "space": "prod", "user": "dev@example.com"}

    def test_lone_space_is_picked(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "only")

        result = TargetService(client).switch("other")

        assert result.data["space"] == "only"

    def test_several_spaces_prompt(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "a")
        client.add_space(other, "b")
        prompts = CannedPrompts(choice="b")

        result = TargetService(client, prompts=prompts).switch("other")

        assert result.data["space"] == "b"
        assert prompts.asked == ["Which space in other?"]

    def test_several_spaces_without_answer(self) -> None:
        client = recording_platform()
        other = client.add_organization("other")
        client.add_space(other, "a")
        client.add_space(other, "b")

        result = TargetService(client).switch("other")

        assert result.ok
        assert result.data["space"] is None
        assert client.mutations("set_target") == [("set_target", "other", "")]

    def test_organization_without_spaces(self) -> None:
        client = recording_platform()
        client.add_organization("empty")

        result = TargetService(client).switch("empty")

        assert result.data["space"] is None

    def test_unknown_space(self) -> None:
        client = recording_platform()
        result = TargetService(client).switch(space="ghost")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert client.mutations("set_target") == []

    def test_space_without_organization(self) -> None:
        client = RecordingPlatform()
        result = TargetService(client).switch(space="dev")
        assert result.error is not None
        assert result.error.code == "NO_CURRENT_ORGANIZATION"
