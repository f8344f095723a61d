"""API credential providers.

The engine never reads a global store directly; it is handed a provider.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from config import IntelConfig

logger = logging.getLogger(__name__)


class CredentialError(RuntimeError):
    """Raised when a credential store cannot be read or written."""


class ApiKeyStatus(str, Enum):
    UNCONFIGURED = "unconfigured"
    TESTING = "testing"
    VALID = "valid"
    INVALID = "invalid"


class CredentialProvider(ABC):
    """Source of the generative API key."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the key, or None when none is configured."""

    def status(self) -> ApiKeyStatus:
        return ApiKeyStatus.VALID if self.get() else ApiKeyStatus.UNCONFIGURED


class StaticCredentialProvider(CredentialProvider):
    def __init__(self, key: Optional[str] = None):
        self.key = (key or "").strip() or None

    def get(self) -> Optional[str]:
        return self.key


class EnvCredentialProvider(CredentialProvider):
    def __init__(self, variable: str = IntelConfig.GEMINI_API_KEY_ENV):
        self.variable = variable

    def get(self) -> Optional[str]:
        return (os.getenv(self.variable) or "").strip() or None


class FileCredentialStore(CredentialProvider):
    """JSON file holding a single key under ``gemini_api_key``."""

    KEY_NAME = "gemini_api_key"
    FILE_MODE = 0o600

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or IntelConfig.CREDENTIAL_STORE_PATH)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise CredentialError(f"Could not read credential store {self.path}: {exc}") from exc
        return payload if isinstance(payload, dict) else {}

    def get(self) -> Optional[str]:
        value = self._load().get(self.KEY_NAME)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    def _write(self, payload: dict) -> None:
        """Write ``payload`` readable by the owner only (mode 0600)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                # O_CREAT ignores the mode for a file that already exists
                os.chmod(self.path, self.FILE_MODE)
                handle.write(json.dumps(payload, indent=2) + "\n")
        except OSError as exc:
            raise CredentialError(f"Could not write credential store {self.path}: {exc}") from exc

    def set(self, key: str) -> None:
        payload = self._load()
        payload[self.KEY_NAME] = key.strip()
        self._write(payload)
        logger.info("Stored API key in %s", self.path)

    def clear(self) -> None:
        payload = self._load()
        if payload.pop(self.KEY_NAME, None) is None:
            return
        self._write(payload)


class ChainedCredentialProvider(CredentialProvider):
    """First provider returning a key wins."""

    def __init__(self, *providers: CredentialProvider):
        self.providers = providers

    def get(self) -> Optional[str]:
        for provider in self.providers:
            try:
                key = provider.get()
            except CredentialError as exc:
                logger.warning("Skipping credential provider %s: %s", type(provider).__name__, exc)
                continue
            if key:
                return key
        return None


def default_provider() -> CredentialProvider:
    return ChainedCredentialProvider(EnvCredentialProvider(), FileCredentialStore())


def configure_api_key(
    store: FileCredentialStore,
    key: str,
    tester: Callable[[str], bool],
    on_status: Optional[Callable[[ApiKeyStatus], None]] = None,
) -> ApiKeyStatus:
    """Test ``key`` and persist it only if the API accepts it."""

    def _report(status: ApiKeyStatus) -> ApiKeyStatus:
        if on_status:
            on_status(status)
        return status

    key = (key or "").strip()
    if not key:
        logger.error("Please enter a valid Gemini API key")
        return _report(ApiKeyStatus.UNCONFIGURED)

    _report(ApiKeyStatus.TESTING)
    if not tester(key):
        logger.error("Invalid Gemini API key or connection failed")
        return _report(ApiKeyStatus.INVALID)

    store.set(key)
    logger.info("Gemini API key configured successfully")
    return _report(ApiKeyStatus.VALID)
