"""Commit pusher: FETCHING_SHA → CREATING_COMMIT → DONE, or FAILED.

Only CREATING_COMMIT writes to the hosting API, so a failure at either
step never leaves a partial commit behind. Retrying means running the whole
sequence again; there is no resume from the middle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from wagit.errors import UpstreamCallError
from wagit.github.client import GitHubClient
from wagit.github.models import CommitRequest
from wagit.wizard.flow import PushBundle

logger = logging.getLogger(__name__)

FETCH_SHA_FAILED = "Failed to fetch file information"
COMMIT_FAILED = "Failed to create commit"


class PushState(str, Enum):
    FETCHING_SHA = "fetching_sha"
    CREATING_COMMIT = "creating_commit"
    DONE = "done"
    FAILED = "failed"


PUSH_STEPS = [
    (PushState.FETCHING_SHA, "Get File SHA", "Fetching current file information"),
    (PushState.CREATING_COMMIT, "Create Commit", "Creating new commit with changes"),
    (PushState.DONE, "Push to GitHub", "Pushing changes to repository"),
]


@dataclass
class PushOutcome:
    state: PushState
    commit_url: str = ""
    error: str = ""
    history: list[PushState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is PushState.DONE

    @property
    def failed_at(self) -> PushState | None:
        """The step that was running when the push failed."""
        if self.state is not PushState.FAILED or len(self.history) < 2:
            return None
        return self.history[-2]


def build_commit_request(bundle: PushBundle, sha: str) -> CommitRequest:
    return CommitRequest.build(message=bundle.commit_message, text=bundle.edited_text, sha=sha)


class CommitPusher:
    """Runs the push sequence for one bundle against a GitHubClient."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def run(
        self,
        bundle: PushBundle,
        on_state: Callable[[PushState], None] | None = None,
    ) -> PushOutcome:
        outcome = PushOutcome(state=PushState.FETCHING_SHA)
        full_name = bundle.repository.full_name

        def enter(state: PushState) -> None:
            outcome.state = state
            outcome.history.append(state)
            if on_state is not None:
                on_state(state)

        enter(PushState.FETCHING_SHA)
        try:
            sha = self._client.get_file_sha(full_name, bundle.file_path)
        except UpstreamCallError as e:
            logger.warning(f"Could not read {bundle.file_path} in {full_name}: {e}")
            outcome.error = FETCH_SHA_FAILED
            enter(PushState.FAILED)
            return outcome

        enter(PushState.CREATING_COMMIT)
        try:
            outcome.commit_url = self._client.commit_file(
                full_name, bundle.file_path, build_commit_request(bundle, sha)
            )
        except UpstreamCallError as e:
            logger.warning(f"Commit to {full_name}/{bundle.file_path} rejected: {e}")
            outcome.error = e.upstream_message or COMMIT_FAILED
            enter(PushState.FAILED)
            return outcome

        enter(PushState.DONE)
        return outcome
