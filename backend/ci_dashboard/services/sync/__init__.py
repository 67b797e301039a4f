"""
Dashboard sync module.

Provides the pieces that keep the dashboard consistent with the CI service:
- SyncController: intent handling with optimistic updates and rollback
- SyncState: in-memory dashboard state
- ConfirmationGate: user confirmation before activating transitions
- StateObserver / QueueObserver: re-render notifications
- Navigator / HttpNavigator: leaving the dashboard
"""

from .controller import SyncController
from .events import StateObserver, SyncEvent
from .gate import Accepted, ConfirmationGate, Declined, StaticConfirmationGate
from .navigation import HttpNavigator, Navigator
from .queue_observer import QueueObserver
from .state import SyncState, build_initial_state

__all__ = [
    "Accepted",
    "ConfirmationGate",
    "Declined",
    "HttpNavigator",
    "Navigator",
    "QueueObserver",
    "StateObserver",
    "StaticConfirmationGate",
    "SyncController",
    "SyncEvent",
    "SyncState",
    "build_initial_state",
]
