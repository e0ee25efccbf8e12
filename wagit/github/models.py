"""Data carried between wizard stages about repositories and files."""

from __future__ import annotations

import base64
from dataclasses import dataclass, replace
from datetime import datetime

# Top-level files the editor offers. Subdirectories are not searched.
SOURCE_EXTENSIONS = (
    ".js",
    ".ts",
    ".tsx",
    ".jsx",
    ".py",
    ".java",
    ".cpp",
    ".c",
    ".cs",
    ".php",
    ".rb",
    ".go",
)


@dataclass(frozen=True)
class RepositoryRef:
    id: int
    name: str
    full_name: str  # "owner/repo"
    html_url: str
    description: str = ""
    stargazers_count: int = 0
    watchers_count: int = 0
    language: str = ""
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FileRef:
    name: str
    path: str
    sha: str  # version token as of the directory listing
    size: int = 0
    type: str = "file"  # "file" | "dir" | "symlink" | "submodule"
    download_url: str = ""
    content: str | None = None  # fetched lazily on selection

    @property
    def is_source_file(self) -> bool:
        return self.type == "file" and self.name.endswith(SOURCE_EXTENSIONS)

    def with_content(self, content: str) -> FileRef:
        return replace(self, content=content)


@dataclass(frozen=True)
class CommitRequest:
    """Body of the contents PUT: message, base64 content and version token."""

    message: str
    content: str  # base64
    sha: str

    @classmethod
    def build(cls, message: str, text: str, sha: str) -> CommitRequest:
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        return cls(message=message, content=encoded, sha=sha)

    def decoded_text(self) -> str:
        return base64.b64decode(self.content).decode("utf-8")

    def payload(self) -> dict:
        return {"message": self.message, "content": self.content, "sha": self.sha}


def filter_source_files(entries: list[FileRef]) -> list[FileRef]:
    return [entry for entry in entries if entry.is_source_file]
