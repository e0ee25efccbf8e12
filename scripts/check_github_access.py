"""Manual verification: list repositories and source files for a real token.

Usage:
    WAGIT_GITHUB_TOKEN=ghp_... python scripts/check_github_access.py [owner/repo]

Without a repo argument, the most recently updated repository is used.
"""

from __future__ import annotations

import os
import sys

from wagit.config import Config
from wagit.errors import UpstreamCallError
from wagit.github.client import GitHubClient
from wagit.ui.components import format_date, format_file_size


def main() -> None:
    config = Config.load()
    token = os.getenv("WAGIT_GITHUB_TOKEN", "")

    if not token:
        print("ERROR: Set WAGIT_GITHUB_TOKEN environment variable")
        sys.exit(1)

    client = GitHubClient(token=token, base_url=config.github_api_url, timeout=config.request_timeout)

    try:
        login = client.authenticate()
        print(f"Authenticated as {login}")

        print("\n--- Repositories (most recently updated first) ---")
        repos = client.list_repositories()
        for repo in repos[:10]:
            print(f"  {repo.full_name}  ({repo.language or 'n/a'}, updated {format_date(repo.updated_at)})")
        print(f"  ... {len(repos)} total")

        full_name = sys.argv[1] if len(sys.argv) > 1 else (repos[0].full_name if repos else "")
        if not full_name:
            print("No repositories to inspect.")
            return

        print(f"\n--- Source files in {full_name} ---")
        files = client.list_source_files(full_name)
        for file in files:
            print(f"  {file.path}  ({format_file_size(file.size)})")

        if files:
            loaded = client.fetch_content(files[0])
            sha = client.get_file_sha(full_name, files[0].path)
            print(f"\n--- {files[0].path} @ {sha[:7]} ---")
            print(loaded.content[:300] if loaded.content else "(empty)")
    except UpstreamCallError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
