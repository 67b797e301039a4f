"""
Dashboard sync controller.

Reconciles local dashboard state with the CI service. Every intent follows the
same shape: optional confirmation, optimistic mutation, remote call, then
either confirmation of the new state or a local rollback with the failure
surfaced in `state.error`. Remote failures are caught at the call site that
issued them and never escape the controller. Nothing is retried.

All coroutines run on one event loop, so state mutation needs no locking.
"""

import asyncio
import logging
from typing import Any, List, Optional

from ci_dashboard.config import DEFAULT_LOGOUT_PATH, DashboardSettings, get_settings
from ci_dashboard.exceptions import (
    ControllerNotInitialized,
    NotFoundError,
    RemoteOperationError,
)
from ci_dashboard.schemas.dashboard import Org, Repo, RepoActivity, ValidationInfo
from ci_dashboard.services.remote import RemoteClients
from .events import StateObserver, SyncEvent
from .gate import CONFIRM_PROMPT, Accepted, ConfirmationGate
from .navigation import Navigator
from .state import SyncState, build_initial_state

logger = logging.getLogger(__name__)


def _index_of(repos: List[Repo], repo: Repo) -> Optional[int]:
    """Position of `repo` in the list: same object first, then same slug."""
    for i, item in enumerate(repos):
        if item is repo:
            return i
    for i, item in enumerate(repos):
        if item.slug == repo.slug:
            return i
    return None


def _payload_message(error: RemoteOperationError) -> str:
    """Message to show for a failed validation: the payload the service sent back."""
    data = error.data
    if isinstance(data, str) and data:
        return data
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data)
    if data is None:
        return error.message
    return str(data)


class SyncController:
    """
    Orchestrates dashboard intents against the remote service.

    Intents:
    - refresh: reload repos and enabled orgs concurrently
    - toggle / activate / delete: repository enablement
    - toggle_org / activate_org / delete_org: organization enablement
    - validate: check a repository's configuration
    - delete_user: delete the account and log out
    - edit / close / change_org: modal and selection handling
    """

    def __init__(
        self,
        state: Optional[SyncState],
        clients: RemoteClients,
        gate: ConfirmationGate,
        navigator: Navigator,
        observer: Optional[StateObserver] = None,
        logout_path: str = DEFAULT_LOGOUT_PATH,
    ):
        self._state = state
        self.clients = clients
        self.gate = gate
        self.navigator = navigator
        self.observer = observer
        self.logout_path = logout_path

    @classmethod
    def load(
        cls,
        clients: RemoteClients,
        gate: ConfirmationGate,
        navigator: Navigator,
        settings: Optional[DashboardSettings] = None,
        route_org: Optional[str] = None,
        observer: Optional[StateObserver] = None,
        docs_url: str = "",
    ) -> "SyncController":
        """Build a controller with load-time state from the bootstrap identity."""
        settings = settings or get_settings()
        state = build_initial_state(
            clients.users,
            clients.teams,
            route_org=route_org,
            docs_url=docs_url or settings.docs_url,
        )
        return cls(
            state,
            clients,
            gate,
            navigator,
            observer=observer,
            logout_path=settings.logout_path,
        )

    # =========================================================================
    # State Access
    # =========================================================================

    @property
    def initialized(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> SyncState:
        if self._state is None:
            raise ControllerNotInitialized()
        return self._state

    def repo_activity(self, repo: Repo) -> RepoActivity:
        return self.state.repo_activity(repo)

    async def _notify(self, event: SyncEvent, **data: Any) -> None:
        if self.observer is not None:
            await self.observer.state_changed(event, **data)

    async def _fail(self, error: RemoteOperationError, **context: Any) -> None:
        self.state.error = error
        logger.warning(
            error.message,
            extra={**context, "error": str(error.data or error.message)},
        )
        await self._notify(SyncEvent.ERROR, message=error.message, **context)

    async def start(self) -> None:
        """Initial load. Skipped when the account was deleted in this session."""
        if not self.initialized:
            logger.info("Dashboard not initialized, skipping initial refresh")
            return
        await self.refresh()

    # =========================================================================
    # Refresh / Reconciliation
    # =========================================================================

    async def refresh(self) -> None:
        """
        Reload repos for the selected org and the enabled-org flags.

        Both requests are in flight together and settle independently: a
        failure of one does not prevent the other from being applied.
        """
        state = self.state
        _, orgs_error = await asyncio.gather(
            self._refresh_repos(state),
            self._refresh_orgs(state),
        )
        # The repo listing clears `error` on success; keep an org failure
        # visible whichever request settled last.
        if orgs_error is not None and state.error is None:
            state.error = orgs_error

    async def _refresh_repos(self, state: SyncState) -> None:
        org_login = state.current_org.login
        try:
            repos = await self.clients.repos.list(state.user.login, org_login)
        except RemoteOperationError as e:
            await self._fail(e, login=org_login)
            return

        state.repos = repos
        state.error = None
        logger.debug(f"Loaded {len(repos)} repositories for {org_login}")
        await self._notify(SyncEvent.REFRESHED_REPOS, count=len(repos))

    async def _refresh_orgs(self, state: SyncState) -> Optional[RemoteOperationError]:
        try:
            enabled = await self.clients.orgs.list_enabled()
        except RemoteOperationError as e:
            await self._fail(e)
            return e

        # Linear scan; the number of enabled orgs is expected to stay small
        for item in enabled:
            for org in state.orgs:
                if org.login == item.login:
                    org.enabled = True
                    break

        await self._notify(SyncEvent.REFRESHED_ORGS, enabled=[o.login for o in enabled])
        return None

    # =========================================================================
    # Repository Toggle
    # =========================================================================

    async def toggle(self, repo: Repo) -> None:
        """
        Handle a repository switch flip.

        The switch already changed `repo.id` presence before this runs: no id
        means the user switched it off, which needs no confirmation.
        """
        if repo.id is None:
            await self.delete(repo)
            return

        result = await self.gate.open_confirm(CONFIRM_PROMPT, self.state)
        if isinstance(result, Accepted):
            await self.activate(repo)
            return

        repo.id = None
        self.state.pending_repo = None
        logger.info(f"Activation of {repo.slug} declined", extra={"slug": repo.slug})
        await self._notify(SyncEvent.ROLLED_BACK, slug=repo.slug)

    async def activate(self, repo: Repo) -> None:
        state = self.state
        index = _index_of(state.repos, repo)
        state.saving = True
        state.transitions[repo.slug] = RepoActivity.ACTIVATING

        try:
            created = await self.clients.repos.create(repo.owner, repo.name, {})
        except RemoteOperationError as e:
            state.pending_repo = None
            repo.id = None
            state.saving = False
            await self._fail(e, slug=repo.slug)
            await self._notify(SyncEvent.ROLLED_BACK, slug=repo.slug)
            return
        finally:
            state.transitions.pop(repo.slug, None)

        if index is not None and index < len(state.repos):
            state.repos[index] = created
        else:
            repo.id = created.id
            logger.debug(f"{repo.slug} is no longer listed, keeping the caller's object")
        state.pending_repo = None
        state.error = None
        state.saving = False
        logger.info(f"Activated {created.slug} (id={created.id})", extra={"slug": created.slug})
        await self._notify(SyncEvent.REPO_ACTIVATED, slug=created.slug, id=created.id)

    async def delete(self, repo: Repo) -> None:
        """
        Deactivate a repository.

        The id is stripped up front and is not restored if the call fails.
        """
        state = self.state
        repo.id = None
        state.transitions[repo.slug] = RepoActivity.DEACTIVATING

        try:
            await self.clients.repos.delete(repo.owner, repo.name)
        except RemoteOperationError as e:
            await self._fail(e, slug=repo.slug)
            return
        finally:
            state.transitions.pop(repo.slug, None)

        logger.info(f"Deactivated {repo.slug}", extra={"slug": repo.slug})
        await self._notify(SyncEvent.REPO_DEACTIVATED, slug=repo.slug)

    # =========================================================================
    # Organization Toggle
    # =========================================================================

    async def toggle_org(self, org: Org) -> None:
        """Handle an organization switch flip; `org.enabled` already reflects it."""
        if not org.enabled:
            await self.delete_org(org)
            return

        result = await self.gate.open_confirm(CONFIRM_PROMPT, self.state)
        if isinstance(result, Accepted):
            await self.activate_org(org)
            return

        self.state.pending_repo = None
        org.enabled = False
        logger.info(f"Enabling {org.login} declined", extra={"login": org.login})
        await self._notify(SyncEvent.ROLLED_BACK, login=org.login)

    async def activate_org(self, org: Org) -> None:
        """Enable an organization, then reload everything: it can bring new repos."""
        state = self.state
        state.saving = True

        try:
            await self.clients.orgs.add(org.login)
        except RemoteOperationError as e:
            state.pending_repo = None
            org.enabled = False
            state.saving = False
            await self._fail(e, login=org.login)
            await self._notify(SyncEvent.ROLLED_BACK, login=org.login)
            return

        state.pending_repo = None
        state.error = None
        state.saving = False
        logger.info(f"Enabled {org.login}", extra={"login": org.login})
        await self._notify(SyncEvent.ORG_ACTIVATED, login=org.login)
        await self.refresh()

    async def delete_org(self, org: Org) -> None:
        state = self.state
        org.enabled = False

        try:
            await self.clients.orgs.delete(org.login)
        except RemoteOperationError as e:
            org.enabled = True
            await self._fail(e, login=org.login)
            await self._notify(SyncEvent.ROLLED_BACK, login=org.login)
            return

        state.pending_repo = None
        state.saving = False
        logger.info(f"Disabled {org.login}", extra={"login": org.login})
        await self._notify(SyncEvent.ORG_DEACTIVATED, login=org.login)
        await self.refresh()

    # =========================================================================
    # Validation Reporting
    # =========================================================================

    async def validate(self, repo: Repo) -> None:
        """
        Validate a repository's configuration into the single validation slot.

        Failures land in `validation_info`, never in `error`.
        """
        state = self.state
        try:
            result = await self.clients.repos.validate(repo.owner, repo.name)
        except RemoteOperationError as e:
            logger.info(f"Validation of {repo.slug} failed", extra={"slug": repo.slug, "error": str(e.data)})
            info = ValidationInfo(slug=repo.slug, message=_payload_message(e))
        else:
            info = ValidationInfo(slug=repo.slug, message=result.message)
            if result.file:
                info.file_content = result.file

        state.validation_info = info
        await self._notify(SyncEvent.VALIDATED, slug=repo.slug)

    # =========================================================================
    # User Deletion
    # =========================================================================

    async def delete_user(self) -> None:
        """Delete the account, then leave through the logout endpoint."""
        try:
            await self.clients.users.delete()
        except RemoteOperationError as e:
            await self._fail(e)
            return

        await self.navigator.navigate(self.logout_path)
        await self._notify(SyncEvent.NAVIGATED, path=self.logout_path)

    # =========================================================================
    # Modal and Selection
    # =========================================================================

    def edit(self, repo: Repo) -> None:
        """Open the per-repository modal."""
        self.state.pending_repo = repo

    def close(self) -> None:
        """Close whatever the modal shows."""
        state = self.state
        state.pending_repo = None
        state.validation_info = None

    async def change_org(self, login: str) -> None:
        """
        Select another org and reload its repositories.

        Raises:
            NotFoundError: login is not one of the user's orgs
        """
        org = self.clients.teams.get(login)
        if org is None:
            raise NotFoundError("Organization")
        self.state.current_org = org
        await self.refresh()
