"""Inference client: prompt → ordered candidate models → first usable text.

Talks to an Ollama-compatible server (POST {base}/api/generate). Candidates
are tried strictly in order, one call at a time, until one returns a success
status with a non-empty ``response`` field.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import requests

from wagit.activity import log_event
from wagit.webhook.models import NO_RESPONSE_TEXT, InferenceRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    """Outcome of asking one candidate model."""

    model: str
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.text) and self.error is None


def first_success(
    candidates: Iterable[str], attempt: Callable[[str], Attempt]
) -> Attempt | None:
    """Return the first ok attempt, or None once the list is exhausted.

    Stops calling ``attempt`` as soon as one succeeds.
    """
    for model in candidates:
        result = attempt(model)
        if result.ok:
            return result
    return None


class InferenceClient:
    """Generates reply text from a local inference server."""

    def __init__(
        self,
        base_url: str,
        models: list[str],
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._models = list(models)
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def models(self) -> list[str]:
        return list(self._models)

    def attempt(self, model: str, prompt: str) -> Attempt:
        """Ask a single model. Never raises; failures come back in ``error``."""
        request = InferenceRequest(model=model, prompt=prompt)
        url = f"{self._base_url}/api/generate"
        try:
            resp = self._session.post(url, json=request.payload(), timeout=self._timeout)
        except requests.RequestException as e:
            return self._failed(model, f"request error: {e}")

        if resp.status_code != 200:
            return self._failed(model, f"HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError:
            return self._failed(model, "response body is not JSON")

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            return self._failed(model, "empty response field")

        logger.info(f"Model {model} answered ({len(text)} chars, done={data.get('done')})")
        log_event("inference_attempt", model=model, ok=True)
        return Attempt(model=model, text=text.strip())

    def generate(self, prompt: str) -> str:
        """Return the first usable model output, or the no-response placeholder."""
        result = first_success(self._models, lambda model: self.attempt(model, prompt))
        if result is None:
            logger.warning(f"All {len(self._models)} candidate models failed")
            return NO_RESPONSE_TEXT
        return result.text

    def close(self) -> None:
        self._session.close()

    def _failed(self, model: str, error: str) -> Attempt:
        logger.warning(f"Model {model} failed: {error}")
        log_event("inference_attempt", model=model, ok=False, error=error)
        return Attempt(model=model, error=error)
