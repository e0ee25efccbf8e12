"""Four-stage edit wizard: auth → repos → code → push.

The wizard's state is one immutable WizardContext. Every user action is a
pure transition that returns a new context; nothing here talks to the
network, so the rules can be tested without Streamlit.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from wagit.errors import ValidationError
from wagit.github.models import RepositoryRef


class Stage(str, Enum):
    AUTH = "auth"
    REPOS = "repos"
    CODE = "code"
    PUSH = "push"


STAGE_TITLES = {
    Stage.AUTH: ("GitHub Authentication", "Connect to your GitHub account"),
    Stage.REPOS: ("Select Repository", "Choose a repository to work with"),
    Stage.CODE: ("Code Editor", "View and edit your code"),
    Stage.PUSH: ("Push Changes", "Push your changes to GitHub"),
}

# Steps shown in the progress indicator once past authentication.
PROGRESS_STEPS = ["Authentication", "Repository", "Code Editor", "Push Changes"]

# Index of the active progress step at each stage.
_PROGRESS_CURRENT = {
    Stage.REPOS: 0,
    Stage.CODE: 1,
    Stage.PUSH: 2,
}

_PREVIOUS = {
    Stage.REPOS: Stage.AUTH,
    Stage.CODE: Stage.REPOS,
    Stage.PUSH: Stage.CODE,
}


@dataclass(frozen=True)
class PushBundle:
    """Everything the push stage needs, captured when the edit is submitted."""

    token: str
    repository: RepositoryRef
    file_path: str
    edited_text: str
    commit_message: str


@dataclass(frozen=True)
class WizardContext:
    stage: Stage = Stage.AUTH
    token: str = ""
    repository: RepositoryRef | None = None
    file_path: str = ""
    edited_text: str = ""
    commit_message: str = ""

    @property
    def can_go_back(self) -> bool:
        return self.stage in _PREVIOUS

    def push_bundle(self) -> PushBundle | None:
        """Entry guard for the push stage: None unless every input is present."""
        if not (
            self.token
            and self.repository is not None
            and self.file_path
            and self.edited_text
            and self.commit_message
        ):
            return None
        return PushBundle(
            token=self.token,
            repository=self.repository,
            file_path=self.file_path,
            edited_text=self.edited_text,
            commit_message=self.commit_message,
        )


def validate_token(token: str) -> str:
    token = token.strip()
    if not token:
        raise ValidationError("Please enter a GitHub token", fields=["token"])
    return token


def validate_edit(edited_text: str, commit_message: str) -> None:
    missing = []
    if not edited_text.strip():
        missing.append("code")
    if not commit_message.strip():
        missing.append("commit message")
    if missing:
        raise ValidationError(
            "Both the edited code and a commit message are required", fields=missing
        )


def authenticated(ctx: WizardContext, token: str) -> WizardContext:
    """The token passed the "who am I" check; keep it and list repositories."""
    return replace(ctx, token=validate_token(token), stage=Stage.REPOS)


def repository_selected(ctx: WizardContext, repository: RepositoryRef) -> WizardContext:
    return replace(
        ctx,
        repository=repository,
        file_path="",
        edited_text="",
        commit_message="",
        stage=Stage.CODE,
    )


def edit_submitted(
    ctx: WizardContext, file_path: str, edited_text: str, commit_message: str
) -> WizardContext:
    """Carry (path, text, message) to the push stage as one bundle."""
    validate_edit(edited_text, commit_message)
    if ctx.repository is None or not file_path:
        raise ValidationError("Select a file before pushing", fields=["file"])
    return replace(
        ctx,
        file_path=file_path,
        edited_text=edited_text,
        commit_message=commit_message.strip(),
        stage=Stage.PUSH,
    )


def push_completed(ctx: WizardContext) -> WizardContext:
    """Back to the editor for another file, with the edit state cleared."""
    return replace(ctx, file_path="", edited_text="", commit_message="", stage=Stage.CODE)


def back(ctx: WizardContext) -> WizardContext:
    previous = _PREVIOUS.get(ctx.stage)
    if previous is None:
        return ctx
    return replace(ctx, stage=previous)


def progress_state(ctx: WizardContext) -> list[tuple[int, str, str]]:
    """(number, label, status) for each progress step.

    Status is "done" before the current step, "active" at it and "pending"
    after it. Every step is pending on the auth stage.
    """
    current = _PROGRESS_CURRENT.get(ctx.stage, -1)
    steps = []
    for i, label in enumerate(PROGRESS_STEPS):
        if current < 0 or i > current:
            status = "pending"
        elif i == current:
            status = "active"
        else:
            status = "done"
        steps.append((i + 1, label, status))
    return steps
