import io
import json

import pytest
from pydantic import ValidationError

from gitea_relay.gitea.models import (
    Hook,
    PullRequestHook,
    PushHook,
    Repository,
)
from gitea_relay.gitea.parse import parse_pull_request, parse_push
from tests.utils import load_sample_data, sample_stream


def test_push_hook_model():
    hook = parse_push(sample_stream("push.json"))

    assert hook.ref == "refs/heads/main"
    assert hook.after == "ef98532add3b2feb7a137426bba1248724367df5"
    assert hook.compare.startswith("https://gitea.example.com/test-org/test-repo/compare/")
    assert hook.repo.name == "test-repo"
    assert hook.repo.full_name == "test-org/test-repo"
    assert hook.repo.url == "https://gitea.example.com/test-org/test-repo"
    assert hook.repo.owner.username == "test-org"
    assert hook.sender.login == "test-user"
    assert hook.sender.username == "test-user"
    assert hook.sender.email == "test-user@example.com"
    assert len(hook.commits) == 2
    assert hook.commits[0].added == ["docs/setup.md"]
    # null lists decode as empty
    assert hook.commits[0].removed == []
    assert hook.commits[1].removed == ["docs/old.md"]


def test_create_hook_model():
    hook = parse_push(sample_stream("create_tag.json"))

    assert hook.ref == "v1.0.0"
    assert hook.ref_type == "tag"
    assert hook.sha == "ef98532add3b2feb7a137426bba1248724367df5"
    assert hook.commits == []


def test_pull_request_hook_model():
    hook = parse_pull_request(sample_stream("pull_request.json"))

    assert hook.action == "opened"
    assert hook.number == 12
    assert hook.pull_request.title == "Add release checklist"
    assert hook.pull_request.state == "open"
    assert hook.pull_request.url == "https://gitea.example.com/test-org/test-repo/pulls/12"
    assert hook.pull_request.user.username == "contributor"
    assert hook.pull_request.user.avatar == "/avatars/9"
    assert hook.pull_request.head.ref == "feature/release-checklist"
    assert hook.pull_request.head.sha == "0d1a26e67d8f5eaf1f6ba5c57fc3c7d91ac0fd1c"
    assert hook.pull_request.base.ref == "main"
    assert hook.sender.username == "maintainer"


def test_parse_text_stream():
    hook = parse_push(io.StringIO('{"ref": "refs/heads/dev", "after": "abc"}'))

    assert hook.ref == "refs/heads/dev"
    assert hook.after == "abc"


def test_missing_fields_are_zero_valued():
    hook = parse_pull_request(io.BytesIO(b"{}"))

    assert hook == PullRequestHook()
    assert hook.number == 0
    assert hook.pull_request.head.sha == ""
    assert hook.sender.login == ""


def test_unknown_fields_are_ignored():
    hook = parse_push(
        io.BytesIO(b'{"ref": "refs/heads/main", "unknown": {"nested": [1, 2]}}')
    )

    assert hook.ref == "refs/heads/main"


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"   ",
        b"{",
        b'{"ref": "refs/heads/main", "commits": [',
        b"not json",
    ],
)
def test_parse_push_invalid_json(body):
    with pytest.raises(json.JSONDecodeError):
        parse_push(io.BytesIO(body))


@pytest.mark.parametrize(
    "body",
    [
        b'{"ref": 5}',
        b'{"commits": {"id": "abc"}}',
        b'{"commits": [{"added": [1]}]}',
        b'{"repository": {"private": "true"}}',
        b"[]",
    ],
)
def test_parse_push_schema_mismatch(body):
    with pytest.raises(ValidationError):
        parse_push(io.BytesIO(body))


@pytest.mark.parametrize(
    "body",
    [
        b'{"number": "twelve"}',
        b'{"number": "12"}',
        b'{"number": 12.0}',
        b'{"repository": {"private": "yes"}}',
        b'{"repository": {"private": 1}}',
        b'{"pull_request": []}',
        b'{"pull_request": {"head": {"sha": 123}}}',
    ],
)
def test_parse_pull_request_errors(body):
    with pytest.raises(ValidationError):
        parse_pull_request(io.BytesIO(body))


def test_parse_pull_request_empty_body():
    with pytest.raises(json.JSONDecodeError):
        parse_pull_request(io.BytesIO(b""))


def test_trailing_data_is_ignored():
    hook = parse_push(io.BytesIO(b'{"ref": "a"} {"ref": "b"}'))

    assert hook.ref == "a"


def test_trailing_garbage_is_ignored():
    hook = parse_pull_request(io.BytesIO(b'\n {"number": 3}\nnot json'))

    assert hook.number == 3


class ChunkedStream:
    """Serves a body a few bytes at a time and fails once it is exhausted."""

    def __init__(self, body, size):
        self.body = body
        self.size = size
        self.reads = 0

    def read(self, n=-1):
        if not self.body:
            raise AssertionError("read past the end of the document")
        self.reads += 1
        chunk, self.body = self.body[: self.size], self.body[self.size :]
        return chunk


def test_reads_only_until_document_is_complete():
    body = '{"ref": "refs/heads/main", "sender": {"login": "zoë"}}'.encode()
    stream = ChunkedStream(body, 3)

    hook = parse_push(stream)

    assert hook.ref == "refs/heads/main"
    assert hook.sender.login == "zoë"
    assert stream.reads == -(-len(body) // 3)


def test_repository_model():
    repository = Repository(**load_sample_data("repository.json"))

    assert repository.full_name == "test-org/test-repo"
    assert repository.owner.username == "test-org"
    assert repository.owner.avatar_url == "/avatars/7"
    assert repository.private
    assert repository.default_branch == "develop"


def test_hook_model():
    hooks = [Hook(**data) for data in load_sample_data("hooks.json")]

    assert [h.id for h in hooks] == [1, 2, 3, 4]
    assert "url" not in hooks[1].config
    assert hooks[2].config["url"] == "http://ci.example.com:8000/hook?access_token=abc"
    assert not hooks[3].active


def test_push_hook_by_field_name():
    hook = PushHook(ref="refs/heads/main", compare="https://c")

    assert hook.compare == "https://c"
    assert hook.model_dump(by_alias=True)["compare_url"] == "https://c"
