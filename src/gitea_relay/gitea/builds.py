"""
Extraction of builds from decoded Gitea hooks.

Push, tag and pull request hooks each map onto a :class:`Build` through their
own function. The user identifiers are looked up through
``IDENTITY_SOURCES``: each entry lists the hook attributes tried in order, and
the first non-empty one wins. Push and tag hooks prefer the sender login for
the author but the sender username for the sender, and pull requests take the
author from the pull request user alone.
"""

import time
from operator import attrgetter

from pydantic import BaseModel

from gitea_relay.models import Build, EventKind, Repo
from gitea_relay.gitea.convert import repo_from_pull_request, repo_from_push
from gitea_relay.gitea.models import PullRequestHook, PushHook
from gitea_relay.urls import expand_avatar, fix_malformed_avatar
from gitea_relay.utils import dedup_strings, first_non_empty

IDENTITY_SOURCES: dict[EventKind, dict[str, tuple[str, ...]]] = {
    EventKind.push: {
        "author": ("sender.login", "sender.username"),
        "sender": ("sender.username", "sender.login"),
    },
    EventKind.tag: {
        "author": ("sender.login", "sender.username"),
        "sender": ("sender.username", "sender.login"),
    },
    EventKind.pull_request: {
        "author": ("pull_request.user.username",),
        "sender": ("sender.username", "sender.login"),
    },
}


def resolve_identity(
    kind: EventKind, field: str, hook: PushHook | PullRequestHook
) -> str:
    return first_non_empty(
        *(attrgetter(path)(hook) for path in IDENTITY_SOURCES[kind][field])
    )


def _now() -> int:
    return int(time.time())


def changed_files(hook: PushHook) -> list[str]:
    files = []
    for commit in hook.commits:
        files.extend(commit.added)
        files.extend(commit.removed)
        files.extend(commit.modified)
    return dedup_strings(files)


def build_from_push(hook: PushHook) -> Build:
    avatar = expand_avatar(hook.repo.url, fix_malformed_avatar(hook.sender.avatar))

    message = ""
    link = hook.compare
    if len(hook.commits) > 0:
        message = hook.commits[0].message

    if len(hook.commits) == 1:
        link = hook.commits[0].url

    return Build(
        event=EventKind.push,
        commit=hook.after,
        ref=hook.ref,
        link=link,
        branch=hook.ref.removeprefix("refs/heads/"),
        message=message,
        avatar=avatar,
        author=resolve_identity(EventKind.push, "author", hook),
        sender=resolve_identity(EventKind.push, "sender", hook),
        email=hook.sender.email,
        timestamp=_now(),
        changed_files=changed_files(hook),
    )


def build_from_tag(hook: PushHook) -> Build:
    # the ref of a create hook is the bare tag name
    tag = hook.ref
    avatar = expand_avatar(hook.repo.url, fix_malformed_avatar(hook.sender.avatar))

    return Build(
        event=EventKind.tag,
        commit=hook.sha,
        ref=f"refs/tags/{tag}",
        link=f"{hook.repo.url}/src/tag/{tag}",
        branch=f"refs/tags/{tag}",
        message=f"created tag {tag}",
        avatar=avatar,
        author=resolve_identity(EventKind.tag, "author", hook),
        sender=resolve_identity(EventKind.tag, "sender", hook),
        email=hook.sender.email,
        timestamp=_now(),
    )


def build_from_pull_request(hook: PullRequestHook) -> Build:
    pr = hook.pull_request
    avatar = expand_avatar(hook.repo.url, fix_malformed_avatar(pr.user.avatar))

    return Build(
        event=EventKind.pull_request,
        commit=pr.head.sha,
        ref=f"refs/pull/{hook.number}/head",
        link=pr.url,
        branch=pr.base.ref,
        message=pr.title,
        avatar=avatar,
        author=resolve_identity(EventKind.pull_request, "author", hook),
        sender=resolve_identity(EventKind.pull_request, "sender", hook),
        timestamp=_now(),
        title=pr.title,
        refspec=f"{pr.head.ref}:{pr.base.ref}",
    )


class PushEvent(BaseModel):
    hook: PushHook


class TagEvent(BaseModel):
    hook: PushHook


class PullRequestEvent(BaseModel):
    hook: PullRequestHook


HookEvent = PushEvent | TagEvent | PullRequestEvent


def extract(event: HookEvent) -> tuple[Repo, Build]:
    """Extract the repository and the build carried by a hook event."""
    if isinstance(event, PushEvent):
        return repo_from_push(event.hook), build_from_push(event.hook)
    elif isinstance(event, TagEvent):
        return repo_from_push(event.hook), build_from_tag(event.hook)
    elif isinstance(event, PullRequestEvent):
        return repo_from_pull_request(event.hook), build_from_pull_request(event.hook)
    raise TypeError(f"Unknown hook event {type(event).__name__}")
