"""
Team directory built from the bootstrap snapshot.

The signed-in user is prepended to the memberships so it is always the first
selectable "org".
"""

from typing import List, Optional

from ci_dashboard.schemas.dashboard import Org, User


class TeamDirectory:
    """In-memory lookup over the user's organization memberships."""

    def __init__(self, user: User, teams: List[Org]):
        self._teams: List[Org] = [user.as_org(), *teams]

    def list(self) -> List[Org]:
        return self._teams

    def get(self, login: str) -> Optional[Org]:
        for team in self._teams:
            if team.login == login:
                return team
        return None
