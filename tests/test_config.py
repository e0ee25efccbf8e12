"""Tests for wagit.config."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from unittest.mock import patch

from wagit.config import DEFAULT_INFERENCE_MODELS, DEFAULT_LOG_PATH, Config

ENV_KEYS = [
    "TWILIO_SID",
    "TWILIO_AUTH",
    "TWILIO_WHATSAPP_FROM",
    "OLLAMA_URL",
    "WAGIT_REPLY_MODE",
    "WAGIT_INFERENCE_MODELS",
    "WAGIT_REQUEST_TIMEOUT",
    "WAGIT_INFERENCE_TIMEOUT",
    "WAGIT_GITHUB_API_URL",
    "WAGIT_LOG_PATH",
    "WAGIT_LOG_LEVEL",
    "WAGIT_SIMPLE_UI",
]


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in ENV_KEYS}


class TestConfigDefaults:
    def test_default_values(self):
        config = Config()
        assert config.twilio_account_sid == ""
        assert config.reply_mode == "echo"
        assert config.inference_models == list(DEFAULT_INFERENCE_MODELS)
        assert config.log_path == DEFAULT_LOG_PATH
        assert config.simple_ui is False

    def test_model_lists_are_independent_copies(self):
        c1 = Config()
        c2 = Config()
        c1.inference_models.append("custom-model")
        assert "custom-model" not in c2.inference_models


class TestConfigLoad:
    def test_load_from_env(self):
        env = _clean_env()
        env.update(
            {
                "TWILIO_SID": "AC123",
                "TWILIO_AUTH": "secret",
                "TWILIO_WHATSAPP_FROM": "whatsapp:+14155238886",
                "OLLAMA_URL": "http://localhost:11434/",
                "WAGIT_REPLY_MODE": "Inference",
                "WAGIT_INFERENCE_MODELS": "mistral, phi3,,",
                "WAGIT_REQUEST_TIMEOUT": "5",
                "WAGIT_LOG_PATH": "/tmp/wagit.jsonl",
                "WAGIT_SIMPLE_UI": "true",
            }
        )
        with patch.dict(os.environ, env, clear=True):
            config = Config.load()
        assert config.twilio_account_sid == "AC123"
        assert config.ollama_url == "http://localhost:11434"
        assert config.reply_mode == "inference"
        assert config.inference_models == ["mistral", "phi3"]
        assert config.request_timeout == 5.0
        assert config.log_path == Path("/tmp/wagit.jsonl")
        assert config.simple_ui is True

    def test_load_defaults_when_env_empty(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = Config.load()
        assert config.twilio_account_sid == ""
        assert config.reply_mode == "echo"
        assert config.inference_models == list(DEFAULT_INFERENCE_MODELS)

    def test_bad_timeout_falls_back_to_default(self):
        env = _clean_env()
        env["WAGIT_REQUEST_TIMEOUT"] = "soon"
        env["WAGIT_INFERENCE_TIMEOUT"] = "-3"
        with patch.dict(os.environ, env, clear=True):
            config = Config.load()
        assert config.request_timeout == 30.0
        assert config.inference_timeout == 60.0

    def test_log_level_is_normalised(self):
        env = _clean_env()
        env["WAGIT_LOG_LEVEL"] = " debug "
        with patch.dict(os.environ, env, clear=True):
            config = Config.load()
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_falls_back_to_info(self):
        env = _clean_env()
        env["WAGIT_LOG_LEVEL"] = "VERBOSE"
        with patch.dict(os.environ, env, clear=True):
            config = Config.load()
        assert config.log_level == "INFO"
        logging.getLogger("wagit.test").setLevel(config.log_level)


class TestConfigValidate:
    def test_validate_all_missing(self):
        issues = Config().validate()
        assert len(issues) == 3
        assert any("TWILIO_SID" in i for i in issues)
        assert any("TWILIO_AUTH" in i for i in issues)
        assert any("TWILIO_WHATSAPP_FROM" in i for i in issues)

    def test_validate_echo_complete(self, echo_config):
        assert echo_config.validate() == []

    def test_inference_requires_server_url(self, echo_config):
        echo_config.reply_mode = "inference"
        issues = echo_config.validate()
        assert len(issues) == 1
        assert "OLLAMA_URL" in issues[0]

    def test_inference_complete(self, inference_config):
        assert inference_config.validate() == []

    def test_unknown_reply_mode(self, echo_config):
        echo_config.reply_mode = "shout"
        issues = echo_config.validate()
        assert len(issues) == 1
        assert "shout" in issues[0]
