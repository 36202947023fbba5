"""Persistence gateway for :class:`~quotebar.state.models.RotationState`.

The gateway sits on top of a tiny key/blob backend and never lets a corrupt
store block startup: unreadable data loads as the empty state, and a state
that cannot be serialized removes the stored blob rather than leaving a
half-written one behind.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol

from quotebar.core.errors import StateDecodeError, StateEncodeError, StateStoreError
from quotebar.state.codec import decode_state, encode_state
from quotebar.state.models import RotationState, normalize

LOGGER = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "quotebar_state_v1"


class BlobStore(Protocol):
    """Minimal key/value backend holding opaque bytes."""

    def get(self, key: str) -> bytes | None:
        ...

    def set(self, key: str, data: bytes) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryBlobStore:
    """Dict-backed store for tests and runs that should not touch disk."""

    def __init__(self, initial: Dict[str, bytes] | None = None) -> None:
        self._blobs: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    def set(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._blobs


class FileBlobStore:
    """One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers only ever see a complete blob.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StateStoreError(f"Failed to read {path.name}: {exc}") from exc

    def set(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StateStoreError(f"Failed to write {path.name}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StateStoreError(f"Failed to delete {path.name}: {exc}") from exc


class QuoteStateStore:
    """Load and save the rotation state under a single key."""

    def __init__(
        self,
        backend: BlobStore,
        *,
        key: str = DEFAULT_STATE_KEY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.backend = backend
        self.key = key
        self._logger = logger or LOGGER

    def load(self) -> RotationState:
        """Return the stored state normalized, or the empty state.

        Never raises: a missing, unreadable or undecodable blob all load as
        :meth:`RotationState.empty`.
        """

        try:
            data = self.backend.get(self.key)
        except StateStoreError as exc:
            self._logger.warning("State backend unreadable, starting empty", extra={"key": self.key, "error": str(exc)})
            return RotationState.empty()
        if data is None:
            return RotationState.empty()

        try:
            state = decode_state(data)
        except StateDecodeError as exc:
            self._logger.warning("Stored state is corrupt, starting empty", extra={"key": self.key, "error": str(exc)})
            return RotationState.empty()
        return normalize(state)

    def save(self, state: RotationState) -> RotationState:
        """Normalize and persist ``state``; returns what was written.

        Raises :class:`StateStoreError` when the backend rejects the write.
        """

        normalized = normalize(state)
        try:
            data = encode_state(normalized)
        except StateEncodeError as exc:
            self._logger.warning("State not serializable, dropping stored copy", extra={"key": self.key, "error": str(exc)})
            self.backend.delete(self.key)
            return normalized
        self.backend.set(self.key, data)
        return normalized


__all__ = [
    "DEFAULT_STATE_KEY",
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "QuoteStateStore",
]
