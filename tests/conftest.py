"""Shared test fixtures for wagit."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from wagit.config import Config
from wagit.github.models import FileRef, RepositoryRef
from wagit.wizard.flow import PushBundle, Stage, WizardContext


@pytest.fixture(autouse=True)
def activity_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test's activity log out of the working directory."""
    log_path = tmp_path / "activity.jsonl"
    monkeypatch.setenv("WAGIT_LOG_PATH", str(log_path))
    return log_path


@pytest.fixture
def echo_config(activity_log: Path) -> Config:
    return Config(
        twilio_account_sid="AC0123456789abcdef",
        twilio_auth_token="secret",
        twilio_whatsapp_from="whatsapp:+14155238886",
        reply_mode="echo",
        log_path=activity_log,
    )


@pytest.fixture
def inference_config(echo_config: Config) -> Config:
    echo_config.reply_mode = "inference"
    echo_config.ollama_url = "http://localhost:11434"
    echo_config.inference_models = ["llama3.2", "llama3", "llama2", "mistral", "phi3"]
    return echo_config


@pytest.fixture
def inbound_form() -> dict[str, str]:
    return {
        "MessageSid": "SM1234567890",
        "From": "whatsapp:+15551234567",
        "To": "whatsapp:+14155238886",
        "Body": "hello",
        "NumMedia": "0",
        "ProfileName": "Sam",
        "WaId": "15551234567",
    }


@pytest.fixture
def sample_repository() -> RepositoryRef:
    return RepositoryRef(
        id=101,
        name="webapp",
        full_name="acme/webapp",
        html_url="https://github.com/acme/webapp",
        description="Customer-facing web application",
        stargazers_count=12,
        watchers_count=3,
        language="Python",
        updated_at=datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_file() -> FileRef:
    return FileRef(
        name="main.py",
        path="main.py",
        sha="3d21ec53a331a6f037a91c368710b99387d012c1",
        size=42,
        type="file",
        download_url="https://raw.githubusercontent.com/acme/webapp/main/main.py",
    )


@pytest.fixture
def edited_text() -> str:
    return "def main():\n    print(\"héllo, wörld\")\n"


@pytest.fixture
def push_bundle(sample_repository: RepositoryRef, edited_text: str) -> PushBundle:
    return PushBundle(
        token="ghp_test123",
        repository=sample_repository,
        file_path="main.py",
        edited_text=edited_text,
        commit_message="Greet the world",
    )


@pytest.fixture
def code_context(sample_repository: RepositoryRef) -> WizardContext:
    return WizardContext(stage=Stage.CODE, token="ghp_test123", repository=sample_repository)
