"""
URL helpers for the links and avatars reported by Gitea.

Nothing in here raises on a bad URL except :func:`parse_url`; the avatar
helpers fall back to the string they were given.
"""

import re
from urllib.parse import SplitResult, urljoin, urlsplit

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SLASH_RUN = re.compile(r"/{3,}")


def parse_url(raw: str) -> SplitResult:
    """
    Split a URL into its components.

    Args:
        raw: An absolute URL or a relative reference

    Returns:
        The components of the URL

    Raises:
        ValueError: If the string is not a valid URL or reference
    """
    if _CONTROL_CHARS.search(raw):
        raise ValueError(f"Invalid control character in URL {raw!r}")
    if raw.startswith(":"):
        raise ValueError(f"Missing protocol scheme in URL {raw!r}")
    if _BAD_ESCAPE.search(raw):
        raise ValueError(f"Invalid escape in URL {raw!r}")

    parts = urlsplit(raw)
    # Accessing the port validates it
    parts.port
    return parts


def _repair_once(url: str) -> str:
    run = _SLASH_RUN.search(url)
    if run is not None:
        # keep the last two slashes, which leaves a scheme-relative URL
        return url[run.end() - 2 :]
    if "//avatars/" in url:
        return url.replace("//avatars/", "/avatars/")
    return url


def fix_malformed_avatar(url: str) -> str:
    """
    Repair the broken avatar URLs some Gitea versions put into webhooks.

    ``https://gitea.com///gravatar.com/avatar/x`` becomes
    ``//gravatar.com/avatar/x`` and ``https://gitea.com//avatars/x`` becomes
    ``https://gitea.com/avatars/x``. The triple slash rule wins when both
    apply. Repairs are repeated until the URL is stable.
    """
    while True:
        fixed = _repair_once(url)
        if fixed == url:
            return url
        url = fixed


def expand_avatar(base: str, raw: str) -> str:
    """Resolve a possibly relative avatar URL against ``base``."""
    try:
        avatar = parse_url(raw)
    except ValueError:
        return raw

    if avatar.scheme:
        # Url is already absolute
        return raw

    try:
        parse_url(base)
    except ValueError:
        return raw

    return urljoin(base, raw)
