"""
In-memory dashboard state.

Built once from the bootstrap identity when the dashboard loads and mutated
only by SyncController. Discarded when the user navigates away.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ci_dashboard.exceptions import RemoteOperationError
from ci_dashboard.schemas.dashboard import Org, Repo, RepoActivity, User, ValidationInfo
from ci_dashboard.services.remote.teams import TeamDirectory
from ci_dashboard.services.remote.users import UserClient

logger = logging.getLogger(__name__)


@dataclass
class SyncState:
    """
    Everything the dashboard renders.

    `pending_repo` and `validation_info` share one modal surface; `saving` is
    raised while an activate-class request is outstanding. `transitions`
    records repos with a call in flight, keyed by slug.
    """

    user: User
    current_org: Org
    orgs: List[Org]
    repos: List[Repo] = field(default_factory=list)
    docs_url: str = ""
    error: Optional[RemoteOperationError] = None
    pending_repo: Optional[Repo] = None
    validation_info: Optional[ValidationInfo] = None
    saving: bool = False
    transitions: Dict[str, RepoActivity] = field(default_factory=dict)

    def repo_activity(self, repo: Repo) -> RepoActivity:
        """Tagged activity of a repo: an in-flight transition, else derived from `id`."""
        in_flight = self.transitions.get(repo.slug)
        if in_flight is not None:
            return in_flight
        return RepoActivity.ACTIVE if repo.id is not None else RepoActivity.INACTIVE

    def find_org(self, login: str) -> Optional[Org]:
        for org in self.orgs:
            if org.login == login:
                return org
        return None


def build_initial_state(
    users: UserClient,
    teams: TeamDirectory,
    route_org: Optional[str] = None,
    docs_url: str = "",
) -> Optional[SyncState]:
    """
    Build the load-time state, or None when the account was deleted in-session.

    Args:
        users: identity facade
        teams: membership directory (user first)
        route_org: org login selected by the route; defaults to the user
        docs_url: documentation link shown in the page
    """
    if users.deleted():
        logger.info("Account deleted in this session, skipping dashboard initialization")
        return None

    user = users.current()
    login = route_org or user.login
    current_org = teams.get(login)
    if current_org is None:
        logger.warning(f"Unknown org {login} in route, falling back to {user.login}")
        current_org = teams.get(user.login)

    return SyncState(
        user=user,
        current_org=current_org,
        orgs=teams.list(),
        docs_url=docs_url,
    )
