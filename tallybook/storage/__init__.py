"""Mini README: Persistent key-value blob stores backing the ledger.

Exports the ``BlobStore`` contract along with an in-memory implementation for
tests and a JSON file implementation that survives between sessions.
"""

from .blob_store import BlobStore, JsonFileBlobStore, MemoryBlobStore

__all__ = ["BlobStore", "JsonFileBlobStore", "MemoryBlobStore"]
