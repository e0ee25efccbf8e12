"""Tests for wagit.github.client: PyGithub calls mocked out."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock, PropertyMock, patch

import pytest
import requests
from github import GithubException

from wagit.errors import UpstreamCallError
from wagit.github.client import GitHubClient
from wagit.github.models import CommitRequest


@pytest.fixture
def gh():
    with patch("wagit.github.client.Github") as github_cls:
        yield github_cls.return_value


@pytest.fixture
def http():
    with patch("wagit.github.client.requests.Session") as session_cls:
        yield session_cls.return_value


@pytest.fixture
def client(gh, http) -> GitHubClient:
    return GitHubClient(token="ghp_test123", timeout=7.0)


def _content_item(name: str, type_: str = "file", size: int = 10) -> MagicMock:
    item = MagicMock()
    item.name = name
    item.path = name
    item.sha = f"sha-{name}"
    item.size = size
    item.type = type_
    item.download_url = f"https://raw.githubusercontent.com/acme/webapp/main/{name}"
    return item


class TestConstruction:
    def test_uses_token_timeout_and_page_size(self):
        with patch("wagit.github.client.Github") as github_cls, patch("wagit.github.client.requests.Session"):
            GitHubClient(token="ghp_x", base_url="https://ghe.example.com/api/v3", timeout=7.0)
        kwargs = github_cls.call_args.kwargs
        assert kwargs["base_url"] == "https://ghe.example.com/api/v3"
        assert kwargs["timeout"] == 7.0
        assert kwargs["per_page"] == 100


class TestAuthenticate:
    def test_valid_token(self, client, gh):
        gh.get_user.return_value.login = "octocat"
        assert client.authenticate() == "octocat"

    def test_invalid_token(self, client, gh):
        user = MagicMock()
        type(user).login = PropertyMock(
            side_effect=GithubException(401, {"message": "Bad credentials"}, None)
        )
        gh.get_user.return_value = user
        with pytest.raises(UpstreamCallError) as exc_info:
            client.authenticate()
        assert "Invalid GitHub token" in str(exc_info.value)
        assert exc_info.value.status == 401
        assert exc_info.value.upstream_message == "Bad credentials"

    def test_network_failure(self, client, gh):
        gh.get_user.side_effect = requests.ConnectionError("offline")
        with pytest.raises(UpstreamCallError) as exc_info:
            client.authenticate()
        assert "connection" in str(exc_info.value)


class TestListRepositories:
    def test_converts_first_page(self, client, gh):
        repo = MagicMock()
        repo.id = 7
        repo.name = "webapp"
        repo.full_name = "acme/webapp"
        repo.html_url = "https://github.com/acme/webapp"
        repo.description = None
        repo.stargazers_count = 4
        repo.watchers_count = 2
        repo.language = None
        repo.updated_at = datetime(2024, 3, 5)
        gh.get_user.return_value.get_repos.return_value.get_page.return_value = [repo]

        repos = client.list_repositories()

        gh.get_user.return_value.get_repos.assert_called_once_with(sort="updated")
        gh.get_user.return_value.get_repos.return_value.get_page.assert_called_once_with(0)
        assert len(repos) == 1
        assert repos[0].full_name == "acme/webapp"
        assert repos[0].description == ""
        assert repos[0].language == ""

    def test_failure_yields_no_partial_list(self, client, gh):
        gh.get_user.return_value.get_repos.return_value.get_page.side_effect = GithubException(
            403, {"message": "Resource not accessible"}, None
        )
        with pytest.raises(UpstreamCallError) as exc_info:
            client.list_repositories()
        assert "token permissions" in str(exc_info.value)


class TestListSourceFiles:
    def test_filters_top_level_listing(self, client, gh):
        gh.get_repo.return_value.get_contents.return_value = [
            _content_item("main.py"),
            _content_item("README.md"),
            _content_item("src", type_="dir"),
            _content_item("index.ts"),
        ]
        files = client.list_source_files("acme/webapp")
        gh.get_repo.assert_called_once_with("acme/webapp", lazy=True)
        gh.get_repo.return_value.get_contents.assert_called_once_with("")
        assert [f.name for f in files] == ["main.py", "index.ts"]
        assert files[0].download_url.endswith("/main.py")

    def test_failure(self, client, gh):
        gh.get_repo.return_value.get_contents.side_effect = GithubException(404, {"message": "Not Found"}, None)
        with pytest.raises(UpstreamCallError):
            client.list_source_files("acme/missing")


class TestFetchContent:
    def test_returns_content_verbatim(self, client, http, sample_file, edited_text):
        resp = MagicMock(status_code=200, content=edited_text.encode("utf-8"))
        http.get.return_value = resp
        loaded = client.fetch_content(sample_file)
        http.get.assert_called_once_with(sample_file.download_url, timeout=7.0)
        assert loaded.content == edited_text
        assert loaded.path == sample_file.path

    def test_non_success(self, client, http, sample_file):
        http.get.return_value = MagicMock(status_code=404, content=b"")
        with pytest.raises(UpstreamCallError):
            client.fetch_content(sample_file)

    def test_network_error(self, client, http, sample_file):
        http.get.side_effect = requests.Timeout("slow")
        with pytest.raises(UpstreamCallError):
            client.fetch_content(sample_file)

    def test_sends_token(self, client, http):
        http.headers.update.assert_called_once()
        headers = http.headers.update.call_args.args[0]
        assert headers["Authorization"] == "token ghp_test123"


class TestGetFileSha:
    def test_returns_sha(self, client, gh):
        gh.get_repo.return_value.get_contents.return_value = MagicMock(sha="abc123")
        assert client.get_file_sha("acme/webapp", "main.py") == "abc123"
        gh.get_repo.return_value.get_contents.assert_called_once_with("main.py")

    def test_not_found(self, client, gh):
        gh.get_repo.return_value.get_contents.side_effect = GithubException(404, {"message": "Not Found"}, None)
        with pytest.raises(UpstreamCallError) as exc_info:
            client.get_file_sha("acme/webapp", "gone.py")
        assert exc_info.value.status == 404

    def test_directory_is_an_error(self, client, gh):
        gh.get_repo.return_value.get_contents.return_value = [MagicMock(), MagicMock()]
        with pytest.raises(UpstreamCallError):
            client.get_file_sha("acme/webapp", "src")


class TestCommitFile:
    def test_puts_payload(self, client, gh):
        gh.requester.requestJsonAndCheck.return_value = (
            {},
            {"commit": {"html_url": "https://github.com/acme/webapp/commit/def456"}},
        )
        request = CommitRequest.build("Update", "print(2)\n", "abc123")
        url = client.commit_file("acme/webapp", "src dir/main.py", request)
        assert url == "https://github.com/acme/webapp/commit/def456"
        gh.requester.requestJsonAndCheck.assert_called_once_with(
            "PUT", "/repos/acme/webapp/contents/src%20dir/main.py", input=request.payload()
        )

    def test_surfaces_upstream_message(self, client, gh):
        gh.requester.requestJsonAndCheck.side_effect = GithubException(
            409, {"message": "main.py does not match abc123"}, None
        )
        with pytest.raises(UpstreamCallError) as exc_info:
            client.commit_file("acme/webapp", "main.py", CommitRequest.build("m", "x", "abc123"))
        assert str(exc_info.value) == "main.py does not match abc123"
        assert exc_info.value.status == 409

    def test_generic_message_without_upstream(self, client, gh):
        gh.requester.requestJsonAndCheck.side_effect = GithubException(500, None, None)
        with pytest.raises(UpstreamCallError) as exc_info:
            client.commit_file("acme/webapp", "main.py", CommitRequest.build("m", "x", "abc123"))
        assert str(exc_info.value) == "Failed to create commit"
