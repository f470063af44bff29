"""Tests for release/upserter.py against an in-memory Contents API."""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Mapping
from urllib.parse import parse_qs, unquote, urlsplit

from ghrel.core.config import GitHubConfig
from ghrel.core.result import Err, Ok, Result
from ghrel.hosting.client import HostingClient
from ghrel.hosting.errors import AuthError, ContentLookupError, FileCommitError
from ghrel.hosting.http import HttpError, HttpResponse, MockHttpClient
from ghrel.output.console import MockConsole
from ghrel.release.model import Committer, FileUpsertRequest
from ghrel.release.upserter import lookup_revision, submit_file, upsert_file

API = "https://api.github.com"
CONTENTS = f"{API}/repos/octo/widget/contents"
BOT = Committer(name="release-bot", email="bot@example.com")


class FakeGitHub:
    """Contents API for one repository, keeping per-branch blob revisions."""

    def __init__(self) -> None:
        self.files: dict[tuple[str, str], bytes] = {}
        self.commits: list[str] = []
        self.puts: list[dict[str, object]] = []

    @staticmethod
    def blob_sha(content: bytes) -> str:
        return hashlib.sha1(b"blob %d\0" % len(content) + content).hexdigest()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> Result[HttpResponse, HttpError]:
        parts = urlsplit(url)
        path = unquote(parts.path.removeprefix("/repos/octo/widget/contents/"))
        query = parse_qs(parts.query)

        if method == "GET":
            branch = query.get("ref", ["main"])[0]
            content = self.files.get((branch, path))
            if content is None:
                return Err(HttpError(url=url, status=404, message="Not Found"))
            return Ok(self._json({"path": path, "sha": self.blob_sha(content)}))

        if method == "PUT":
            payload = json.loads(body or b"{}")
            self.puts.append(payload)
            key = (payload.get("branch", "main"), path)
            current = self.files.get(key)
            sent = payload.get("sha")
            if current is None and sent is not None:
                return Err(HttpError(url=url, status=422, message="Unprocessable Entity"))
            if current is not None and sent != self.blob_sha(current):
                return Err(
                    HttpError(
                        url=url,
                        status=409,
                        message="Conflict",
                        body=json.dumps({"message": f"{path} does not match {sent}"}),
                    )
                )
            self.files[key] = base64.b64decode(payload["content"])
            commit = hashlib.sha1(f"commit {len(self.commits)}".encode()).hexdigest()
            self.commits.append(commit)
            status = 201 if current is None else 200
            return Ok(self._json({"commit": {"sha": commit}}, status))

        return Err(HttpError(url=url, status=405, message="Method Not Allowed"))

    @staticmethod
    def _json(payload: object, status: int = 200) -> HttpResponse:
        return HttpResponse(status=status, body=json.dumps(payload).encode())


def _client(http: object) -> HostingClient:
    settings = GitHubConfig()
    return HostingClient(http=http, token="ghp_test", settings=settings)  # type: ignore[arg-type]


def _request(content: bytes, *, branch: str | None = None) -> FileUpsertRequest:
    return FileUpsertRequest(
        owner="octo",
        repo="widget",
        path="Formula/widget.rb",
        content=content,
        message="Update formula",
        committer=BOT,
        branch=branch,
    )


class TestUpsertFile:
    def test_create_sends_no_sha(self) -> None:
        github = FakeGitHub()

        result = upsert_file(_client(github), _request(b"v1"))

        assert result == Ok(github.commits[0])
        assert "sha" not in github.puts[0]
        assert github.puts[0]["committer"] == {"name": "release-bot", "email": "bot@example.com"}
        assert github.puts[0]["content"] == base64.b64encode(b"v1").decode()
        assert github.files[("main", "Formula/widget.rb")] == b"v1"

    def test_update_sends_current_blob_sha(self) -> None:
        github = FakeGitHub()
        client = _client(github)

        first = upsert_file(client, _request(b"v1"))
        second = upsert_file(client, _request(b"v2"))

        assert isinstance(first, Ok)
        assert isinstance(second, Ok)
        assert first.value != second.value
        assert github.puts[1]["sha"] == FakeGitHub.blob_sha(b"v1")
        assert github.files[("main", "Formula/widget.rb")] == b"v2"

    def test_branch_is_used_for_lookup_and_commit(self) -> None:
        github = FakeGitHub()
        github.files[("main", "Formula/widget.rb")] = b"on main"
        console = MockConsole()

        result = upsert_file(_client(github), _request(b"v1", branch="tap"), console=console)

        assert isinstance(result, Ok)
        # The file only exists on main, so this is a create on the tap branch.
        assert "sha" not in github.puts[0]
        assert github.puts[0]["branch"] == "tap"
        assert github.files[("tap", "Formula/widget.rb")] == b"v1"
        assert console.find("creating Formula/widget.rb")

    def test_lookup_failure_stops_before_put(self) -> None:
        http = MockHttpClient()
        http.set_error("GET", f"{CONTENTS}/Formula/widget.rb", 500, "Server Error")

        result = upsert_file(_client(http), _request(b"v1"))

        assert isinstance(result, Err)
        assert isinstance(result.error, ContentLookupError)
        assert http.calls_to("PUT") == []

    def test_rejected_token_is_an_auth_error(self) -> None:
        http = MockHttpClient()
        http.set_error("GET", f"{CONTENTS}/Formula/widget.rb", 401, "Unauthorized")

        result = upsert_file(_client(http), _request(b"v1"))

        assert isinstance(result, Err)
        assert isinstance(result.error, AuthError)
        assert http.calls_to("PUT") == []


class TestSubmitFile:
    def test_stale_revision_is_rejected(self) -> None:
        github = FakeGitHub()
        client = _client(github)
        upsert_file(client, _request(b"v1"))
        stale = FakeGitHub.blob_sha(b"v1")
        upsert_file(client, _request(b"v2"))

        result = submit_file(client, _request(b"v3"), stale)

        assert isinstance(result, Err)
        assert isinstance(result.error, FileCommitError)
        assert result.error.status == 409
        assert github.files[("main", "Formula/widget.rb")] == b"v2"

    def test_missing_commit_sha(self) -> None:
        http = MockHttpClient()
        http.set_json("PUT", f"{CONTENTS}/Formula/widget.rb", {"content": {}})

        result = submit_file(_client(http), _request(b"v1"), None)

        assert isinstance(result, Err)
        assert "no commit sha" in result.error.message


class TestLookupRevision:
    def test_missing_file_is_none(self) -> None:
        assert lookup_revision(_client(FakeGitHub()), "octo", "widget", "README.md") == Ok(None)

    def test_existing_file(self) -> None:
        github = FakeGitHub()
        github.files[("main", "README.md")] = b"hello"

        result = lookup_revision(_client(github), "octo", "widget", "README.md")

        assert result == Ok(FakeGitHub.blob_sha(b"hello"))

    def test_directory_is_an_error(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{CONTENTS}/docs", [{"name": "index.md", "type": "file"}])

        result = lookup_revision(_client(http), "octo", "widget", "docs")

        assert isinstance(result, Err)
        assert "not a file" in result.error.message

    def test_ref_query_parameter(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{CONTENTS}/README.md?ref=gh-pages", {"sha": "abc"})

        result = lookup_revision(_client(http), "octo", "widget", "README.md", "gh-pages")

        assert result == Ok("abc")

    def test_forbidden_is_an_error(self) -> None:
        http = MockHttpClient()
        http.set_error("GET", f"{CONTENTS}/README.md", 403, "Forbidden")

        result = lookup_revision(_client(http), "octo", "widget", "README.md")

        assert isinstance(result, Err)
        assert result.error.status == 403
