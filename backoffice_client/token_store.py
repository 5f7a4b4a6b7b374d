from __future__ import annotations

import json
import logging
import os
from typing import Protocol

from msal_extensions import FilePersistence, FilePersistenceWithDataProtection

from backoffice_client.models import TokenPair

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    def load(self) -> TokenPair | None: ...

    def save(self, tokens: TokenPair) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    def __init__(self, tokens: TokenPair | None = None):
        self._tokens = tokens

    def load(self) -> TokenPair | None:
        return self._tokens

    def save(self, tokens: TokenPair) -> None:
        self._tokens = tokens

    def clear(self) -> None:
        self._tokens = None


class FileTokenStore:
    """Token pair persisted as a JSON document on disk.

    Uses DPAPI-protected persistence where the platform offers it and plain
    file persistence otherwise. A cleared store holds an empty document.
    """

    def __init__(self, path: str, persistence=None):
        self._path = path
        self._persistence = persistence or self._build_persistence(path)

    @staticmethod
    def _build_persistence(path: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            return FilePersistenceWithDataProtection(path)
        except Exception:
            return FilePersistence(path)

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> TokenPair | None:
        try:
            raw = self._persistence.load()
        except OSError:
            return None

        if not raw or not raw.strip():
            return None

        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable token cache at %s", self._path)
            return None

        if not isinstance(payload, dict):
            return None
        return TokenPair.from_dict(payload)

    def save(self, tokens: TokenPair) -> None:
        self._persistence.save(json.dumps(tokens.to_dict()))

    def clear(self) -> None:
        self._persistence.save("")
