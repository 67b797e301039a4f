"""
Pydantic schemas for the dashboard's repositories, organizations and users.

Models are mutable: the controller flips `Repo.id` and `Org.enabled` in place
for optimistic updates and rolls them back on failure.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RepoActivity(str, Enum):
    """Activity of a repository as seen by the dashboard."""
    INACTIVE = "inactive"
    ACTIVATING = "activating"
    ACTIVE = "active"
    DEACTIVATING = "deactivating"


class Repo(BaseModel):
    """A source repository. `id` is present only while the repo is active."""
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    name: str
    slug: str = ""
    id: int | None = None
    link_url: str | None = None
    private: bool = False
    org: bool = False

    def model_post_init(self, __context) -> None:
        if not self.slug:
            self.slug = f"{self.owner}/{self.name}"


class Org(BaseModel):
    """An organization the user belongs to (the user is its own default org)."""
    model_config = ConfigDict(populate_by_name=True)

    login: str
    avatar: str | None = Field(default=None, alias="avatar_url")
    enabled: bool = False


class User(BaseModel):
    """The signed-in identity."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    login: str
    avatar: str | None = Field(default=None, alias="avatar_url")

    def as_org(self) -> Org:
        return Org(login=self.login, avatar=self.avatar)


class EnabledOrg(BaseModel):
    """Entry of the enabled-organizations listing."""
    login: str
    enabled: bool = True


class ValidationResponse(BaseModel):
    """Payload of the validation endpoint. `file` is empty when no conversion is needed."""
    message: str
    file: str = ""


class ValidationInfo(BaseModel):
    """Result of validating one repo's configuration, shown in a single modal slot."""
    slug: str
    message: str
    file_content: str | None = None
