"""
Confirmation gate abstraction.

The controller asks the gate before activating a repository or an
organization. A gate answers with one of two results instead of raising:

    result = await gate.open_confirm(CONFIRM_PROMPT, scope)
    if isinstance(result, Accepted):
        ...
    else:  # Declined
        ...
"""

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

CONFIRM_PROMPT = "/_confirm_template"


@dataclass(frozen=True)
class Accepted:
    """The user confirmed the pending action."""
    value: Any = None


@dataclass(frozen=True)
class Declined:
    """The user dismissed the prompt. Not an error."""
    reason: Any = None


Confirmation = Union[Accepted, Declined]


@runtime_checkable
class ConfirmationGate(Protocol):
    """
    Protocol for asking the user to confirm an action.

    Implementations can target different surfaces:
    - A modal dialog in a UI
    - A terminal prompt
    - A fixed answer for unattended runs
    """

    async def open_confirm(self, prompt_ref: str, scope: Any) -> Confirmation:
        """Show the prompt identified by `prompt_ref` and wait for the answer."""
        ...


class StaticConfirmationGate:
    """Gate with a fixed answer, for unattended runs and scripted sessions."""

    def __init__(self, accept: bool = True, reason: str = "declined"):
        self.accept = accept
        self.reason = reason

    async def open_confirm(self, prompt_ref: str, scope: Any) -> Confirmation:
        if self.accept:
            return Accepted()
        return Declined(self.reason)
