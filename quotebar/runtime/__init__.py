"""Runtime helpers package.

Owns the persistence gateway for the rotation state, the host controller
that applies ticks and edits, and the periodic scheduler.
"""
from .controller import QuoteController
from .scheduler import RotationScheduler
from .store import FileBlobStore, MemoryBlobStore, QuoteStateStore

__all__ = [
    "FileBlobStore",
    "MemoryBlobStore",
    "QuoteController",
    "QuoteStateStore",
    "RotationScheduler",
]
