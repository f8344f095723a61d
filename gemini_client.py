"""Thin client for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from config import IntelConfig

logger = logging.getLogger(__name__)

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
JSON_OBJECT_PATTERN = re.compile(r"{[\s\S]*}")


class GeminiError(RuntimeError):
    """Raised when the generative API call fails or returns no text."""


class GeminiClient:
    """POST prompts to Gemini and return the first candidate's text."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise GeminiError("GeminiClient requires an API key")
        self.api_key = api_key
        self.model = model or IntelConfig.GEMINI_MODEL
        self.base_url = (base_url or IntelConfig.GEMINI_API_URL).rstrip("/")
        self.timeout = timeout or IntelConfig.HTTP_TIMEOUT_SECONDS
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    @staticmethod
    def _payload(prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def generate_content(self, prompt: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "X-goog-api-key": self.api_key,
        }
        try:
            resp = self.session.post(
                self._endpoint(self.model),
                json=self._payload(prompt),
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise GeminiError(f"Gemini returned invalid JSON: {exc}") from exc

        text = _candidate_text(data)
        if not text:
            raise GeminiError("Gemini response contained no candidate text")
        logger.debug("Gemini returned %d characters", len(text))
        return text

    def test_connection(self, api_key: Optional[str] = None) -> bool:
        """True when the key can complete a trivial request."""
        try:
            resp = self.session.post(
                self._endpoint(IntelConfig.GEMINI_TEST_MODEL),
                params={"key": api_key or self.api_key},
                json=self._payload("Test connection"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Gemini connection test failed: %s", exc)
            return False
        return resp.ok


def check_api_key(api_key: str, session: Optional[requests.Session] = None) -> bool:
    """Standalone key check used when configuring a new key."""
    if not api_key:
        return False
    with GeminiClient(api_key, session=session) as client:
        return client.test_connection()


def _candidate_text(data: Any) -> Optional[str]:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def extract_json_array(text: str) -> Optional[List[Any]]:
    """Pull the outermost JSON array out of free-form model output."""
    match = JSON_ARRAY_PATTERN.search(text or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse JSON array from model output: %s", exc)
        return None
    return parsed if isinstance(parsed, list) else None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse JSON object from model output: %s", exc)
        return None
    return parsed if isinstance(parsed, dict) else None
