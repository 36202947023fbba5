"""Quote rotation engine package."""
from .rotation_engine import (
    RotationResult,
    apply_rotation_if_needed,
    force_next_quote,
    next_rotation_at,
    rotation_steps,
)

__all__ = [
    "RotationResult",
    "apply_rotation_if_needed",
    "force_next_quote",
    "next_rotation_at",
    "rotation_steps",
]
