from gitea_relay.models import Perm, Repo, Team
from gitea_relay.gitea.models import (
    Organization,
    Permission,
    PullRequestHook,
    PushHook,
    Repository,
)
from gitea_relay.urls import expand_avatar


def repo_name(full_name: str) -> str:
    """
    Short repository name from an ``owner/name`` full name.

    Takes the last path segment, and the whole string if it has no slash.
    """
    return full_name.rsplit("/", 1)[-1]


def to_repo(repository: Repository) -> Repo:
    return Repo(
        name=repo_name(repository.full_name),
        owner=repository.owner.username,
        full_name=repository.full_name,
        avatar=expand_avatar(repository.html_url, repository.owner.avatar_url),
        link=repository.html_url,
        private=repository.private,
        clone=repository.clone_url,
        branch=repository.default_branch,
    )


def to_perm(permission: Permission) -> Perm:
    return Perm(
        pull=permission.pull,
        push=permission.push,
        admin=permission.admin,
    )


def to_team(organization: Organization, link: str) -> Team:
    return Team(
        login=organization.username,
        avatar=expand_avatar(link, organization.avatar_url),
    )


def repo_from_push(hook: PushHook) -> Repo:
    return Repo(
        name=hook.repo.name,
        owner=hook.repo.owner.username,
        full_name=hook.repo.full_name,
        link=hook.repo.url,
    )


def repo_from_pull_request(hook: PullRequestHook) -> Repo:
    return Repo(
        name=hook.repo.name,
        owner=hook.repo.owner.username,
        full_name=hook.repo.full_name,
        link=hook.repo.url,
    )
