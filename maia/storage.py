"""
Local persistence for the learner profile.

Profiles are stored as JSON under a single well-known key in a key-value
store. Storage is best-effort local caching:
- A corrupt entry is logged and ignored (the caller falls back to defaults)
- A failed write is logged; in-memory state stays authoritative
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from maia.config import DEFAULT_STATE_DIR, PROFILE_KEY
from maia.schemas import UserProfile

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value

    def remove(self, key: str):
        self.data.pop(key, None)


class FileKeyValueStore:
    """
    One JSON file per key under a directory (default: ~/.maia).

    Writes go to a temporary file that is renamed over the target, so a
    reader never sees a half-written entry.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or DEFAULT_STATE_DIR)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str):
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str):
        self._path(key).unlink(missing_ok=True)


def new_profile() -> UserProfile:
    """Create a fresh profile with a new id and default preferences."""
    return UserProfile()


class ProfileStore:
    """Load and save the UserProfile under a single key."""

    def __init__(self, store: KeyValueStore, key: str = PROFILE_KEY):
        self.store = store
        self.key = key

    def load(self) -> Optional[UserProfile]:
        """
        Load the stored profile.

        Returns:
            The profile, or None when nothing is stored or the stored entry
            cannot be read. A corrupt entry is left in place until the next
            save overwrites it.
        """
        try:
            raw = self.store.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read user profile from local storage: {e}")
            return None
        if raw is None:
            return None

        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Failed to parse user profile from local storage: {e}")
            return None

    def save(self, profile: UserProfile) -> bool:
        """Write the profile. Returns False (and logs) if the write failed."""
        try:
            self.store.set(self.key, profile.model_dump_json())
        except OSError as e:
            logger.error(f"Failed to save user profile to local storage: {e}")
            return False
        return True

    def clear(self):
        try:
            self.store.remove(self.key)
        except OSError as e:
            logger.error(f"Failed to clear user profile from local storage: {e}")
