from typing import Iterable

from sanic.log import logger

from gitea_relay.gitea.models import CreateHookOption, Hook
from gitea_relay.urls import parse_url


def _hostname(raw: str) -> str | None:
    try:
        return parse_url(raw).hostname
    except ValueError:
        return None


def matching_hooks(hooks: Iterable[Hook], link: str) -> Hook | None:
    """
    Find the first hook delivering to the same host as ``link``.

    Hooks are compared by hostname only, so a hook registered with another
    scheme, port or path still matches. Returns None if ``link`` is not a URL
    or has no host.
    """
    host = _hostname(link)
    if not host:
        return None

    for hook in hooks:
        url = hook.config.get("url")
        if url is None:
            continue
        if _hostname(url) == host:
            logger.debug("Hook %d delivers to %s", hook.id, host)
            return hook
    return None


def hook_option(link: str, secret: str, events: list[str]) -> CreateHookOption:
    return CreateHookOption(
        config={"url": link, "secret": secret, "content_type": "json"},
        events=events,
    )
