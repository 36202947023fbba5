"""Top-level package for the quotebar quote rotator.

The subpackages mirror the runtime layers: ``state`` holds the persisted
model and its normalization rules, ``rotation`` the pure tick functions,
``runtime`` the persistence gateway and host loop, and ``interfaces`` the
presentation collaborators. Everything here should remain import-safe.
"""

# The __all__ list is intentionally left minimal at this stage.
__all__: list[str] = []
