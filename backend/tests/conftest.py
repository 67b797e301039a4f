"""Pytest configuration and fixtures for dashboard tests."""

from typing import Any, List, Optional

import pytest

from ci_dashboard.exceptions import RemoteOperationError
from ci_dashboard.schemas.dashboard import EnabledOrg, Org, Repo, User, ValidationResponse
from ci_dashboard.services.remote import RemoteClients
from ci_dashboard.services.remote.teams import TeamDirectory
from ci_dashboard.services.sync import (
    Accepted,
    Declined,
    SyncController,
    SyncEvent,
    build_initial_state,
)


@pytest.fixture
def anyio_backend():
    """Restrict anyio tests to asyncio backend."""
    return "asyncio"


class FakeRepoClient:
    """In-memory stand-in for RepoClient with scripted results."""

    def __init__(self, call_log: List[tuple]):
        self.call_log = call_log
        self.listing: List[Repo] = []
        self.list_error: Optional[RemoteOperationError] = None
        self.create_error: Optional[RemoteOperationError] = None
        self.delete_error: Optional[RemoteOperationError] = None
        self.validation = ValidationResponse(message="ok", file="")
        self.validate_error: Optional[RemoteOperationError] = None
        self.next_id = 100
        self.list_calls = 0

    async def list(self, user_login: str, org_login: str) -> List[Repo]:
        self.list_calls += 1
        self.call_log.append(("repos.list", user_login, org_login))
        if self.list_error:
            raise self.list_error
        return [repo.model_copy() for repo in self.listing]

    async def create(self, owner: str, name: str, body: Optional[dict] = None) -> Repo:
        self.call_log.append(("repos.create", owner, name))
        if self.create_error:
            raise self.create_error
        self.next_id += 1
        return Repo(owner=owner, name=name, id=self.next_id)

    async def delete(self, owner: str, name: str) -> None:
        self.call_log.append(("repos.delete", owner, name))
        if self.delete_error:
            raise self.delete_error

    async def validate(self, owner: str, name: str) -> ValidationResponse:
        self.call_log.append(("repos.validate", owner, name))
        if self.validate_error:
            raise self.validate_error
        return self.validation


class FakeOrgClient:
    """In-memory stand-in for OrgClient."""

    def __init__(self, call_log: List[tuple]):
        self.call_log = call_log
        self.enabled: List[EnabledOrg] = []
        self.list_error: Optional[RemoteOperationError] = None
        self.add_error: Optional[RemoteOperationError] = None
        self.delete_error: Optional[RemoteOperationError] = None

    async def list_enabled(self) -> List[EnabledOrg]:
        self.call_log.append(("orgs.list_enabled",))
        if self.list_error:
            raise self.list_error
        return list(self.enabled)

    async def add(self, login: str) -> None:
        self.call_log.append(("orgs.add", login))
        if self.add_error:
            raise self.add_error

    async def delete(self, login: str) -> None:
        self.call_log.append(("orgs.delete", login))
        if self.delete_error:
            raise self.delete_error


class FakeUserClient:
    """In-memory stand-in for UserClient."""

    def __init__(self, call_log: List[tuple], user: User):
        self.call_log = call_log
        self.user = user
        self.is_deleted = False
        self.delete_error: Optional[RemoteOperationError] = None

    def current(self) -> User:
        return self.user

    def deleted(self) -> bool:
        return self.is_deleted

    async def delete(self) -> None:
        self.call_log.append(("users.delete",))
        if self.delete_error:
            raise self.delete_error
        self.is_deleted = True


class RecordingGate:
    """Confirmation gate answering with a fixed result and recording prompts."""

    def __init__(self, call_log: List[tuple], accept: bool = True):
        self.call_log = call_log
        self.accept = accept
        self.prompts: List[str] = []

    async def open_confirm(self, prompt_ref: str, scope: Any):
        self.prompts.append(prompt_ref)
        self.call_log.append(("gate.open_confirm", prompt_ref))
        if self.accept:
            return Accepted(True)
        return Declined("cancel")


class RecordingNavigator:
    def __init__(self, call_log: List[tuple]):
        self.call_log = call_log
        self.visited: List[str] = []

    async def navigate(self, path: str) -> None:
        self.visited.append(path)
        self.call_log.append(("navigate", path))


class RecordingObserver:
    def __init__(self):
        self.events: List[tuple] = []

    async def state_changed(self, event: SyncEvent, **data: Any) -> None:
        self.events.append((event, data))


@pytest.fixture
def call_log() -> List[tuple]:
    return []


@pytest.fixture
def user() -> User:
    return User(login="octocat")


@pytest.fixture
def clients(call_log, user) -> RemoteClients:
    """Remote collaborators backed by in-memory fakes."""
    return RemoteClients(
        repos=FakeRepoClient(call_log),
        orgs=FakeOrgClient(call_log),
        users=FakeUserClient(call_log, user),
        teams=TeamDirectory(user, [Org(login="acme"), Org(login="initech")]),
    )


@pytest.fixture
def gate(call_log) -> RecordingGate:
    return RecordingGate(call_log)


@pytest.fixture
def navigator(call_log) -> RecordingNavigator:
    return RecordingNavigator(call_log)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def controller(clients, gate, navigator, observer) -> SyncController:
    """Controller with load-time state for the user `octocat`."""
    state = build_initial_state(clients.users, clients.teams)
    return SyncController(state, clients, gate, navigator, observer=observer)


def remote_error(status_code: int = 500, data: Any = "boom") -> RemoteOperationError:
    return RemoteOperationError("test call", status_code=status_code, data=data)
