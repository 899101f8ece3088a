from enum import StrEnum

from pydantic import BaseModel


class EventKind(StrEnum):
    push = "push"
    tag = "tag"
    pull_request = "pull_request"


class Repo(BaseModel):
    kind: str = "git"
    name: str = ""
    owner: str = ""
    full_name: str = ""  # owner/name format
    avatar: str = ""
    link: str = ""
    private: bool = False
    clone: str = ""
    branch: str = ""


class Perm(BaseModel):
    pull: bool = False
    push: bool = False
    admin: bool = False


class Team(BaseModel):
    login: str
    avatar: str = ""


class Build(BaseModel):
    event: EventKind
    commit: str = ""
    ref: str = ""
    link: str = ""
    branch: str = ""
    message: str = ""
    avatar: str = ""
    author: str = ""
    sender: str = ""
    email: str = ""
    timestamp: int = 0
    title: str = ""
    refspec: str = ""  # head:base format
    changed_files: list[str] = []
