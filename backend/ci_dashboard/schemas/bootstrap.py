"""
Pydantic schema for the bootstrap snapshot the server injects at page load.
"""

import json

from pydantic import BaseModel, ConfigDict, Field

from .dashboard import Org, User


class Bootstrap(BaseModel):
    """Initial identity data: signed-in user, org memberships, CSRF token, docs link."""
    model_config = ConfigDict(populate_by_name=True)

    user: User
    teams: list[Org] = []
    csrf: str = ""
    docs_url: str = Field(default="", alias="docsUrl")

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Bootstrap":
        """Parse the injected snapshot. A `null` teams entry means no memberships."""
        data = json.loads(raw)
        if data.get("teams") is None:
            data["teams"] = []
        return cls.model_validate(data)
