"""Shared type aliases for readability and contract enforcement.

Timestamps cross the storage boundary as UNIX seconds while the engine works
on aware datetimes; the aliases keep the two representations apart.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, MutableMapping, NewType, TypeAlias

Timestamp = NewType("Timestamp", float)

JSONLike: TypeAlias = Mapping[str, Any]
MutableJSONLike: TypeAlias = MutableMapping[str, Any]

NowProvider: TypeAlias = Callable[[], datetime]
RandomIndexSource: TypeAlias = Callable[[int], int]
