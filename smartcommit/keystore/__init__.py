"""API Key Storage Package

Minimal get/save/clear capability for the Gemini API key. Callers only
request the key; nothing here logs or prints it.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

ENV_VAR = "GEMINI_API_KEY"
CREDENTIALS_DIR = ".smartcommit"
CREDENTIALS_FILENAME = "credentials.json"


class KeyStore(ABC):
    """Thread-safe key storage. Subclasses implement the _unlocked hooks."""

    def __init__(self):
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            key = self._get()
        if key is None or not key.strip():
            return None
        return key.strip()

    def save(self, key: str) -> None:
        if not key or not key.strip():
            raise ValueError("API key must not be empty")
        with self._lock:
            self._save(key.strip())

    def clear(self) -> None:
        with self._lock:
            self._clear()

    @abstractmethod
    def _get(self) -> Optional[str]:
        pass

    @abstractmethod
    def _save(self, key: str) -> None:
        pass

    @abstractmethod
    def _clear(self) -> None:
        pass


class MemoryKeyStore(KeyStore):
    """Process-local storage, mostly for tests and one-off runs."""

    def __init__(self, key: Optional[str] = None):
        super().__init__()
        self._key = key

    def _get(self) -> Optional[str]:
        return self._key

    def _save(self, key: str) -> None:
        self._key = key

    def _clear(self) -> None:
        self._key = None


class EnvKeyStore(KeyStore):
    """Reads GEMINI_API_KEY. Writes only affect the current process."""

    def __init__(self, var_name: str = ENV_VAR):
        super().__init__()
        self.var_name = var_name

    def _get(self) -> Optional[str]:
        return os.environ.get(self.var_name)

    def _save(self, key: str) -> None:
        os.environ[self.var_name] = key

    def _clear(self) -> None:
        os.environ.pop(self.var_name, None)


class FileKeyStore(KeyStore):
    """JSON credentials file readable only by the owner (~/.smartcommit/credentials.json)."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = path or Path.home() / CREDENTIALS_DIR / CREDENTIALS_FILENAME

    def _get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return None
        key = data.get("api_key") if isinstance(data, dict) else None
        return key if isinstance(key, str) else None

    def _save(self, key: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump({"api_key": key}, f)
        os.chmod(self.path, 0o600)

    def _clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class ChainKeyStore(KeyStore):
    """Reads from the first store holding a key.

    Saves go to `writer` (the first store if not given); clear empties all.
    """

    def __init__(self, *stores: KeyStore, writer: Optional[KeyStore] = None):
        super().__init__()
        if not stores:
            raise ValueError("ChainKeyStore needs at least one store")
        self.stores = stores
        self.writer = writer or stores[0]

    def _get(self) -> Optional[str]:
        for store in self.stores:
            key = store.get()
            if key:
                return key
        return None

    def _save(self, key: str) -> None:
        self.writer.save(key)

    def _clear(self) -> None:
        for store in self.stores:
            store.clear()


def default_key_store() -> KeyStore:
    """Environment first, then the credentials file, which also receives saves."""
    file_store = FileKeyStore()
    return ChainKeyStore(EnvKeyStore(), file_store, writer=file_store)


__all__ = [
    "KeyStore",
    "MemoryKeyStore",
    "EnvKeyStore",
    "FileKeyStore",
    "ChainKeyStore",
    "default_key_store",
    "ENV_VAR",
]
