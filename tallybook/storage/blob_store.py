"""Mini README: Opaque string blob stores addressed by key.

Structure:
    * BlobStore - abstract get/set contract consumed by the ledger.
    * MemoryBlobStore - dict-backed store for tests and throwaway sessions.
    * JsonFileBlobStore - single JSON document on disk mapping keys to blobs.

Stores never interpret the blobs they hold. The file store mirrors browser
local storage: reads of a missing or unreadable file behave as an empty
store, and every write replaces the whole document atomically.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class BlobStore(ABC):
    """Base interface for key-value string storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the blob stored under ``key``."""


class MemoryBlobStore(BlobStore):
    """Keep blobs in a dictionary for the lifetime of the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value


class JsonFileBlobStore(BlobStore):
    """Persist blobs inside one JSON object file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()
        LOGGER.debug("Using JSON blob store at %s", self.path)

    def _read_all(self) -> Dict[str, str]:
        """Load the whole document, degrading to an empty mapping."""

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as error:
            LOGGER.warning("Could not read blob store %s: %s", self.path, error)
            return {}

        try:
            document = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as error:
            LOGGER.warning("Blob store %s is not valid JSON: %s", self.path, error)
            return {}
        if not isinstance(document, dict):
            LOGGER.warning("Blob store %s does not contain a JSON object", self.path)
            return {}
        return {str(key): value for key, value in document.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        document = self._read_all()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, temp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                json.dump(document, handle)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s bytes under key '%s' to %s", len(value), key, self.path)
