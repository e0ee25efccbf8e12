"""Shared UI components for the wagit Streamlit pages."""

from __future__ import annotations

from datetime import datetime

import streamlit as st

from wagit.config import Config
from wagit.github.client import GitHubClient
from wagit.github.models import FileRef, RepositoryRef
from wagit.ui.presentation import Presentation

DESCRIPTION_LIMIT = 100

FILE_ICONS = {
    "js": "\U0001f7e8",
    "ts": "\U0001f537",
    "tsx": "\U0001f537",
    "jsx": "\U0001f7e8",
    "py": "\U0001f40d",
    "java": "☕",
    "cpp": "⚙️",
    "c": "⚙️",
    "cs": "\U0001f537",
    "php": "\U0001f418",
    "rb": "\U0001f48e",
    "go": "\U0001f439",
}

CODE_LANGUAGES = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "php": "php",
    "rb": "ruby",
    "go": "go",
}

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def truncate_description(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters and mark the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_date(value: datetime | str | None) -> str:
    """Human-readable date, e.g. "Mar 5, 2024"."""
    if value is None or value == "":
        return "unknown"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value:%b} {value.day}, {value.year}"


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def _extension(name: str) -> str:
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def file_icon(name: str) -> str:
    return FILE_ICONS.get(_extension(name), "\U0001f4c4")


def code_language(name: str) -> str | None:
    return CODE_LANGUAGES.get(_extension(name))


def repository_stats(repo: RepositoryRef, presentation: Presentation) -> str:
    """One-line star/watch/language summary for a repository card."""
    if presentation.show_icons:
        stars = presentation.label("⭐", str(repo.stargazers_count))
        watchers = presentation.label("\U0001f441", str(repo.watchers_count))
        parts = [stars, watchers]
    else:
        parts = [f"Stars: {repo.stargazers_count}", f"Watchers: {repo.watchers_count}"]
    if repo.language:
        if presentation.show_language_tags:
            parts.append(f":blue-background[{repo.language}]")
        else:
            parts.append(f"Language: {repo.language}")
    return "  ".join(parts)


def render_repository_card(repo: RepositoryRef, index: int, presentation: Presentation) -> bool:
    """Render one repository card. Returns True when it was selected."""
    with st.container(border=True):
        title = presentation.label("\U0001f419", repo.name)
        st.markdown(f"**{title}**  ·  #{index}")
        if repo.description:
            st.caption(truncate_description(repo.description))
        st.markdown(repository_stats(repo, presentation))
        st.caption(f"Updated {format_date(repo.updated_at)}")
        return st.button("Select Repository", key=f"select_repo_{repo.id}", type="primary")


def file_button_label(file: FileRef, presentation: Presentation) -> str:
    return f"{presentation.label(file_icon(file.name), file.name)} ({format_file_size(file.size)})"


def get_github_client(token: str, config: Config) -> GitHubClient:
    """GitHub client for the session token, using the configured API and timeout."""
    return GitHubClient(token=token, base_url=config.github_api_url, timeout=config.request_timeout)


def render_error_with_retry(title: str, message: str, key: str) -> bool:
    """Show an error box with a Retry button. Returns True when Retry was clicked."""
    st.error(f"**{title}:** {message}")
    return st.button("Retry", key=key)
