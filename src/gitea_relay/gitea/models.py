from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)


class WireModel(BaseModel):
    """
    Base for payloads produced by Gitea.

    Unknown fields are ignored, and missing or ``null`` fields keep their
    zero value so that partial payloads still decode. Scalars are strict:
    a value of the wrong JSON type is a decode error, never coerced.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Owner(WireModel):
    id: StrictInt = 0
    username: StrictStr = ""
    avatar_url: StrictStr = ""


class HookRepository(WireModel):
    id: StrictInt = 0
    name: StrictStr = ""
    full_name: StrictStr = ""
    url: StrictStr = Field(default="", alias="html_url")
    private: StrictBool = False
    owner: Owner = Field(default_factory=Owner)


class Sender(WireModel):
    id: StrictInt = 0
    login: StrictStr = ""
    username: StrictStr = ""
    email: StrictStr = ""
    avatar: StrictStr = Field(default="", alias="avatar_url")


class Pusher(WireModel):
    name: StrictStr = ""
    email: StrictStr = ""
    login: StrictStr = ""
    username: StrictStr = ""


class Commit(WireModel):
    id: StrictStr = ""
    message: StrictStr = ""
    url: StrictStr = ""
    added: list[StrictStr] = []
    removed: list[StrictStr] = []
    modified: list[StrictStr] = []
    timestamp: StrictStr = ""


class PushHook(WireModel):
    sha: StrictStr = ""
    ref: StrictStr = ""
    before: StrictStr = ""
    after: StrictStr = ""
    compare: StrictStr = Field(default="", alias="compare_url")
    ref_type: StrictStr = ""
    pusher: Pusher = Field(default_factory=Pusher)
    repo: HookRepository = Field(default_factory=HookRepository, alias="repository")
    commits: list[Commit] = []
    sender: Sender = Field(default_factory=Sender)


class PullRequestUser(WireModel):
    id: StrictInt = 0
    login: StrictStr = ""
    username: StrictStr = ""
    email: StrictStr = ""
    avatar: StrictStr = Field(default="", alias="avatar_url")


class PullRequestHead(WireModel):
    ref: StrictStr = ""
    sha: StrictStr = ""


class PullRequestBase(WireModel):
    ref: StrictStr = ""
    sha: StrictStr = ""


class PullRequest(WireModel):
    id: StrictInt = 0
    user: PullRequestUser = Field(default_factory=PullRequestUser)
    title: StrictStr = ""
    body: StrictStr = ""
    state: StrictStr = ""
    url: StrictStr = Field(default="", alias="html_url")
    head: PullRequestHead = Field(default_factory=PullRequestHead)
    base: PullRequestBase = Field(default_factory=PullRequestBase)


class PullRequestHook(WireModel):
    action: StrictStr = ""
    number: StrictInt = 0
    pull_request: PullRequest = Field(default_factory=PullRequest)
    repo: HookRepository = Field(default_factory=HookRepository, alias="repository")
    sender: Sender = Field(default_factory=Sender)


class User(WireModel):
    id: StrictInt = 0
    # the API reports the user name under "login"
    username: StrictStr = Field(default="", alias="login")
    avatar_url: StrictStr = ""


class Repository(WireModel):
    id: StrictInt = 0
    owner: User = Field(default_factory=User)
    full_name: StrictStr = ""
    html_url: StrictStr = ""
    clone_url: StrictStr = ""
    private: StrictBool = False
    default_branch: StrictStr = ""


class Permission(WireModel):
    admin: StrictBool = False
    push: StrictBool = False
    pull: StrictBool = False


class Organization(WireModel):
    id: StrictInt = 0
    username: StrictStr = ""
    avatar_url: StrictStr = ""


class Hook(WireModel):
    id: StrictInt = 0
    type: StrictStr = ""
    config: dict[StrictStr, StrictStr] = {}
    events: list[StrictStr] = []
    active: StrictBool = False


class CreateHookOption(BaseModel):
    type: str = "gitea"
    config: dict[str, str]
    events: list[str]
    active: bool = True
