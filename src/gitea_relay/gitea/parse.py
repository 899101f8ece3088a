import codecs
import json
from typing import IO, Any, Mapping

from pydantic import ValidationError
from sanic.log import logger

from gitea_relay import metrics
from gitea_relay.exceptions import HookDecodeError
from gitea_relay.models import Build, Repo
from gitea_relay.gitea.builds import (
    HookEvent,
    PullRequestEvent,
    PushEvent,
    TagEvent,
    extract,
)
from gitea_relay.gitea.models import PullRequestHook, PushHook

EVENT_HEADERS = ("X-Gitea-Event", "X-Gogs-Event")

HOOK_PUSH = "push"
HOOK_CREATED = "create"
HOOK_PULL_REQUEST = "pull_request"

ACTION_OPEN = "opened"
ACTION_SYNC = "synchronized"

STATE_OPEN = "open"

REF_BRANCH = "branch"
REF_TAG = "tag"

CHUNK_SIZE = 4096


def read_document(stream: IO) -> Any:
    """
    Read the first JSON document from a binary or text stream.

    Reading stops once a complete document has arrived; anything after it
    is ignored.

    Raises:
        json.JSONDecodeError: If the stream ends before a complete document
    """
    decoder = json.JSONDecoder()
    utf8 = codecs.getincrementaldecoder("utf-8")()
    buffer = ""
    while True:
        chunk = stream.read(CHUNK_SIZE)
        eof = not chunk
        if isinstance(chunk, bytes):
            chunk = utf8.decode(chunk, final=eof)
        buffer += chunk
        try:
            document, _ = decoder.raw_decode(buffer.lstrip())
            return document
        except json.JSONDecodeError:
            if eof:
                raise


def parse_push(stream: IO) -> PushHook:
    """
    Decode a push or create hook body.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON
        pydantic.ValidationError: If the body does not match the hook schema
    """
    return PushHook.model_validate(read_document(stream))


def parse_pull_request(stream: IO) -> PullRequestHook:
    """
    Decode a pull request hook body.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON
        pydantic.ValidationError: If the body does not match the hook schema
    """
    return PullRequestHook.model_validate(read_document(stream))


def event_from_headers(headers: Mapping[str, str]) -> str:
    """Name of the event a delivery carries, or an empty string."""
    lowered = {k.lower(): v for k, v in headers.items()}
    for name in EVENT_HEADERS:
        if lowered.get(name.lower()):
            return lowered[name.lower()]
    return ""


def _ignore(event: str, reason: str) -> None:
    logger.debug("Ignoring %s hook: %s", event, reason)
    metrics.hooks_ignored_total.labels(event, reason).inc()
    return None


def _push_event(hook: PushHook) -> HookEvent | str:
    if hook.ref.startswith("refs/tags/"):
        return "tag push"
    if hook.ref_type == REF_BRANCH:
        return "branch creation"
    return PushEvent(hook=hook)


def _created_event(hook: PushHook) -> HookEvent | str:
    if hook.ref_type != REF_TAG:
        return f"created {hook.ref_type or 'ref'} is not a tag"
    return TagEvent(hook=hook)


def _pull_request_event(hook: PullRequestHook) -> HookEvent | str:
    if hook.action not in (ACTION_OPEN, ACTION_SYNC):
        return f"action {hook.action}"
    if hook.pull_request.state != STATE_OPEN:
        return f"pull request is {hook.pull_request.state}"
    return PullRequestEvent(hook=hook)


_DECODERS = {
    HOOK_PUSH: (parse_push, _push_event),
    HOOK_CREATED: (parse_push, _created_event),
    HOOK_PULL_REQUEST: (parse_pull_request, _pull_request_event),
}


def parse_hook(event: str, stream: IO) -> tuple[Repo, Build] | None:
    """
    Turn a webhook delivery into the repository and build it describes.

    Args:
        event: The event name from the delivery headers
        stream: The delivery body

    Returns:
        The repository and build, or None if the delivery should not
        trigger a build

    Raises:
        HookDecodeError: If the body cannot be decoded
    """
    metrics.hooks_received_total.labels(event).inc()

    if event not in _DECODERS:
        return _ignore(event, "unsupported event")

    decode, select = _DECODERS[event]
    try:
        with metrics.track_hook_decode(event):
            hook = decode(stream)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Unable to decode %s hook: %s", event, e)
        raise HookDecodeError(event, str(e)) from e

    selected = select(hook)
    if isinstance(selected, str):
        return _ignore(event, selected)

    repo, build = extract(selected)
    logger.debug(
        "Extracted %s build for %s at %s", build.event, repo.full_name, build.commit
    )
    metrics.builds_extracted_total.labels(build.event).inc()
    return repo, build
