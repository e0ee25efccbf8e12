"""Thin wrapper around PyGithub for the calls the edit wizard makes.

Every method performs exactly one hosting-API request (plus PyGithub's own
lazy completion) and converts failures into UpstreamCallError with a message
fit to show the user.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests
from github import Auth, Github, GithubException
from github.ContentFile import ContentFile
from github.Repository import Repository

from wagit.config import DEFAULT_GITHUB_API_URL
from wagit.errors import UpstreamCallError
from wagit.github.models import CommitRequest, FileRef, RepositoryRef, filter_source_files

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


def _upstream_message(e: GithubException) -> str:
    data = e.data if isinstance(e.data, dict) else {}
    message = data.get("message")
    return message if isinstance(message, str) else ""


class GitHubClient:
    """Authenticated GitHub client bound to one personal access token.

    Usage:
        client = GitHubClient(token="ghp_...")
        login = client.authenticate()
        repos = client.list_repositories()
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self._timeout = timeout
        self._gh = Github(
            auth=Auth.Token(token),
            base_url=base_url,
            timeout=timeout,
            per_page=PAGE_SIZE,
        )
        self._http = requests.Session()
        self._http.headers.update(
            {
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github.v3+json",
            }
        )

    def authenticate(self) -> str:
        """Check the token with a "who am I" call and return the login."""
        try:
            login = self._gh.get_user().login
        except GithubException as e:
            logger.info(f"Token rejected by GitHub (HTTP {e.status})")
            raise UpstreamCallError(
                "Invalid GitHub token. Please check your token and try again.",
                status=e.status,
                upstream_message=_upstream_message(e),
            ) from e
        except requests.RequestException as e:
            raise UpstreamCallError(
                "Failed to authenticate. Please check your connection and try again."
            ) from e
        logger.info(f"Authenticated as {login}")
        return login

    def list_repositories(self) -> list[RepositoryRef]:
        """The caller's repositories, most recently updated first, one page."""
        try:
            page = self._gh.get_user().get_repos(sort="updated").get_page(0)
            return [self._to_repository_ref(repo) for repo in page]
        except GithubException as e:
            raise UpstreamCallError(
                "Failed to fetch repositories. Please check your token permissions.",
                status=e.status,
                upstream_message=_upstream_message(e),
            ) from e
        except requests.RequestException as e:
            raise UpstreamCallError(
                "Failed to connect to GitHub. Please check your connection."
            ) from e

    def list_source_files(self, full_name: str) -> list[FileRef]:
        """Source files in the repository's top-level directory only."""
        try:
            contents = self._gh.get_repo(full_name, lazy=True).get_contents("")
            if not isinstance(contents, list):
                contents = [contents]
            entries = [self._to_file_ref(item) for item in contents]
        except GithubException as e:
            raise UpstreamCallError(
                "Failed to fetch repository files. Please check your permissions.",
                status=e.status,
                upstream_message=_upstream_message(e),
            ) from e
        except requests.RequestException as e:
            raise UpstreamCallError(
                "Failed to connect to GitHub. Please check your connection."
            ) from e
        files = filter_source_files(entries)
        logger.info(f"Found {len(files)} source files in {full_name} ({len(entries)} entries)")
        return files

    def fetch_content(self, file: FileRef) -> FileRef:
        """Download a file's raw bytes via its direct download reference."""
        if not file.download_url:
            raise UpstreamCallError("Failed to fetch file content.")
        try:
            resp = self._http.get(file.download_url, timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamCallError("Failed to load file content.") from e
        if resp.status_code != 200:
            raise UpstreamCallError("Failed to fetch file content.", status=resp.status_code)
        try:
            content = resp.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UpstreamCallError("File is not UTF-8 text and cannot be edited.") from e
        return file.with_content(content)

    def get_file_sha(self, full_name: str, path: str) -> str:
        """Current version token of a file, required for the next write."""
        try:
            content = self._gh.get_repo(full_name, lazy=True).get_contents(path)
        except GithubException as e:
            raise UpstreamCallError(
                "Failed to fetch file information",
                status=e.status,
                upstream_message=_upstream_message(e),
            ) from e
        except requests.RequestException as e:
            raise UpstreamCallError("Failed to fetch file information") from e
        if isinstance(content, list) or not content.sha:
            raise UpstreamCallError("Failed to fetch file information")
        return content.sha

    def commit_file(self, full_name: str, path: str, request: CommitRequest) -> str:
        """PUT new file contents and return the commit's html URL."""
        url = f"/repos/{full_name}/contents/{quote(path)}"
        try:
            _, data = self._gh.requester.requestJsonAndCheck("PUT", url, input=request.payload())
        except GithubException as e:
            upstream = _upstream_message(e)
            raise UpstreamCallError(
                upstream or "Failed to create commit",
                status=e.status,
                upstream_message=upstream,
            ) from e
        except requests.RequestException as e:
            raise UpstreamCallError("Failed to push changes to GitHub") from e
        commit_url = (data or {}).get("commit", {}).get("html_url", "")
        logger.info(f"Committed {path} to {full_name}: {commit_url}")
        return commit_url

    def close(self) -> None:
        self._http.close()
        self._gh.close()

    @staticmethod
    def _to_repository_ref(repo: Repository) -> RepositoryRef:
        return RepositoryRef(
            id=repo.id,
            name=repo.name,
            full_name=repo.full_name,
            html_url=repo.html_url,
            description=repo.description or "",
            stargazers_count=repo.stargazers_count or 0,
            watchers_count=repo.watchers_count or 0,
            language=repo.language or "",
            updated_at=repo.updated_at,
        )

    @staticmethod
    def _to_file_ref(item: ContentFile) -> FileRef:
        return FileRef(
            name=item.name,
            path=item.path,
            sha=item.sha,
            size=item.size or 0,
            type=item.type,
            download_url=item.download_url or "",
        )
