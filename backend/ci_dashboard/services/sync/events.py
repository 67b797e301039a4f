"""
State observation for re-rendering.

Decouples the controller from whatever draws the dashboard.
"""

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class SyncEvent(str, Enum):
    """State changes the controller announces."""
    REFRESHED_REPOS = "refreshed_repos"
    REFRESHED_ORGS = "refreshed_orgs"
    REPO_ACTIVATED = "repo_activated"
    REPO_DEACTIVATED = "repo_deactivated"
    ORG_ACTIVATED = "org_activated"
    ORG_DEACTIVATED = "org_deactivated"
    VALIDATED = "validated"
    ROLLED_BACK = "rolled_back"
    ERROR = "error"
    NAVIGATED = "navigated"


@runtime_checkable
class StateObserver(Protocol):
    """
    Protocol for observing controller state changes.

    Implementations can target different renderers:
    - An asyncio.Queue drained by a render loop
    - A websocket pushing to a browser
    - Logging only
    """

    async def state_changed(self, event: SyncEvent, **data: Any) -> None:
        """Called after every state mutation with event-specific data."""
        ...
