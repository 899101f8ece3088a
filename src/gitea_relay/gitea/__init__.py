from typing import IO, Iterable, Mapping

from sanic.log import logger

from gitea_relay.config import Config
from gitea_relay.models import Build, Perm, Repo, Team
from gitea_relay.gitea.convert import to_perm, to_repo, to_team
from gitea_relay.gitea.hooks import hook_option, matching_hooks
from gitea_relay.gitea.models import (
    CreateHookOption,
    Hook,
    Organization,
    Permission,
    Repository,
)
from gitea_relay.gitea.parse import event_from_headers, parse_hook


class Gitea:
    def __init__(self, config: Config):
        self.config = config
        logger.setLevel(config.OVERRIDE_LOGGING)

    def repo(self, repository: Repository) -> Repo:
        repo = to_repo(repository)
        if self.config.PRIVATE_MODE:
            repo.private = True
        return repo

    def perm(self, permission: Permission) -> Perm:
        return to_perm(permission)

    def team(self, organization: Organization) -> Team:
        return to_team(organization, self.config.GITEA_URL)

    def hook(
        self, headers: Mapping[str, str], stream: IO
    ) -> tuple[Repo, Build] | None:
        event = event_from_headers(headers)
        logger.debug("Parsing %s hook", event or "unnamed")
        return parse_hook(event, stream)

    def activate(
        self, hooks: Iterable[Hook], link: str, secret: str
    ) -> tuple[Hook | None, CreateHookOption]:
        """
        Plan the registration of a webhook delivering to ``link``.

        Returns the existing hook on the same host, which has to be deleted
        first, and the options for the new hook.
        """
        stale = matching_hooks(hooks, link)
        if stale is not None:
            logger.debug("Replacing hook %d for %s", stale.id, link)
        return stale, hook_option(link, secret, self.config.HOOK_EVENTS)

    def deactivate(self, hooks: Iterable[Hook], link: str) -> Hook | None:
        hook = matching_hooks(hooks, link)
        if hook is None:
            logger.debug("No hook registered for %s", link)
        return hook
