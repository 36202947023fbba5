"""Rotation state model, its stored JSON form and user edits."""
from .codec import decode_state, encode_state
from .models import DisplayStyle, RotationState, launch_state, normalize

__all__ = [
    "DisplayStyle",
    "RotationState",
    "decode_state",
    "encode_state",
    "launch_state",
    "normalize",
]
