"""Configuration loading for wagit.

Config sources (in priority order):
1. Explicit arguments passed to functions
2. Environment variables (TWILIO_SID, OLLAMA_URL, WAGIT_*, etc.)
3. .env file in current directory

The GitHub token is deliberately absent: it is entered in the UI and only
ever held in session memory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

REPLY_MODES = ("echo", "inference")
DEFAULT_INFERENCE_MODELS = [
    "llama3.2",
    "llama3",
    "llama2",
    "mistral",
    "phi3",
]
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_LOG_PATH = Path("wagit-activity.jsonl")
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_INFERENCE_TIMEOUT = 60.0


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _list_env(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


def _bool_env(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _log_level_env(name: str, default: str = "INFO") -> str:
    level = os.getenv(name, default).strip().upper()
    return level if isinstance(logging.getLevelName(level), int) else default


@dataclass
class Config:
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_whatsapp_from: str = ""  # "whatsapp:+14155238886"
    ollama_url: str = ""
    reply_mode: str = "echo"  # "echo" | "inference"
    inference_models: list[str] = field(default_factory=lambda: list(DEFAULT_INFERENCE_MODELS))
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    inference_timeout: float = DEFAULT_INFERENCE_TIMEOUT
    github_api_url: str = DEFAULT_GITHUB_API_URL
    log_path: Path = DEFAULT_LOG_PATH
    log_level: str = "INFO"
    simple_ui: bool = False

    @classmethod
    def load(cls) -> Config:
        return cls(
            twilio_account_sid=os.getenv("TWILIO_SID", ""),
            twilio_auth_token=os.getenv("TWILIO_AUTH", ""),
            twilio_whatsapp_from=os.getenv("TWILIO_WHATSAPP_FROM", ""),
            ollama_url=os.getenv("OLLAMA_URL", "").rstrip("/"),
            reply_mode=os.getenv("WAGIT_REPLY_MODE", "echo").strip().lower() or "echo",
            inference_models=_list_env("WAGIT_INFERENCE_MODELS", DEFAULT_INFERENCE_MODELS),
            request_timeout=_float_env("WAGIT_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            inference_timeout=_float_env("WAGIT_INFERENCE_TIMEOUT", DEFAULT_INFERENCE_TIMEOUT),
            github_api_url=os.getenv("WAGIT_GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/"),
            log_path=Path(os.getenv("WAGIT_LOG_PATH", str(DEFAULT_LOG_PATH))),
            log_level=_log_level_env("WAGIT_LOG_LEVEL"),
            simple_ui=_bool_env("WAGIT_SIMPLE_UI"),
        )

    @property
    def uses_inference(self) -> bool:
        return self.reply_mode == "inference"

    def validate(self) -> list[str]:
        """Return a list of missing config issues."""
        issues = []
        if not self.twilio_account_sid:
            issues.append("Twilio account SID not set (TWILIO_SID)")
        if not self.twilio_auth_token:
            issues.append("Twilio auth token not set (TWILIO_AUTH)")
        if not self.twilio_whatsapp_from:
            issues.append("Twilio WhatsApp sender not set (TWILIO_WHATSAPP_FROM)")
        if self.reply_mode not in REPLY_MODES:
            issues.append(
                f"Unknown reply mode '{self.reply_mode}' (WAGIT_REPLY_MODE must be echo or inference)"
            )
        elif self.uses_inference and not self.ollama_url:
            issues.append("Inference server URL not set (OLLAMA_URL)")
        return issues
