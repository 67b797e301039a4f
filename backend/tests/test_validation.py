"""Tests for validation reporting."""

import pytest

from ci_dashboard.exceptions import ValidationFailure
from ci_dashboard.schemas.dashboard import Repo, ValidationResponse

from conftest import remote_error


@pytest.fixture
def repo() -> Repo:
    return Repo(owner="acme", name="api", id=42)


class TestValidate:

    @pytest.mark.anyio
    async def test_empty_file_leaves_file_content_unset(self, controller, clients, repo) -> None:
        clients.repos.validation = ValidationResponse(message="Your files are valid.", file="")

        await controller.validate(repo)

        info = controller.state.validation_info
        assert info.slug == "acme/api"
        assert info.message == "Your files are valid."
        assert info.file_content is None

    @pytest.mark.anyio
    async def test_file_sets_file_content(self, controller, clients, repo) -> None:
        clients.repos.validation = ValidationResponse(message="Please upgrade", file="diff content")

        await controller.validate(repo)

        info = controller.state.validation_info
        assert info.file_content == "diff content"
        assert info.message == "Please upgrade"

    @pytest.mark.anyio
    async def test_failure_uses_payload_as_message(self, controller, clients, repo) -> None:
        clients.repos.validate_error = ValidationFailure(
            "GET /api/repos/acme/api/validate", status_code=400, data="MAINTAINERS is missing"
        )

        await controller.validate(repo)

        info = controller.state.validation_info
        assert info.slug == "acme/api"
        assert info.message == "MAINTAINERS is missing"
        assert info.file_content is None
        assert controller.state.error is None

    @pytest.mark.anyio
    async def test_failure_with_json_payload(self, controller, clients, repo) -> None:
        clients.repos.validate_error = remote_error(400, {"message": "bad config"})

        await controller.validate(repo)

        assert controller.state.validation_info.message == "bad config"

    @pytest.mark.anyio
    async def test_last_call_wins(self, controller, clients, repo) -> None:
        other = Repo(owner="acme", name="web")

        await controller.validate(repo)
        clients.repos.validation = ValidationResponse(message="second", file="x")
        await controller.validate(other)

        info = controller.state.validation_info
        assert info.slug == "acme/web"
        assert info.message == "second"

    @pytest.mark.anyio
    async def test_does_not_clear_general_error(self, controller, repo) -> None:
        stale = remote_error()
        controller.state.error = stale

        await controller.validate(repo)

        assert controller.state.error is stale
