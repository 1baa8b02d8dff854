"""Exception hierarchy for keytab materialization.

Two families hang off MaterializerError:

    IdentityFailure  — scoped to one identity record. The engine catches these
                       and turns them into a failed MaterializationResult so the
                       rest of the batch keeps going.
    EngineFault      — configuration or security faults. These propagate out of
                       the engine and abort the invocation.

KeyMaterialError is what a KeyMaterialProvider raises; the engine wraps it in
MaterializationFailed.
"""

from __future__ import annotations

from keytab_materializer.model.result import FailureKind


class MaterializerError(Exception):
    """Base class for every error raised by this package."""


class IdentityFailure(MaterializerError):
    kind: FailureKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DestinationUnavailable(IdentityFailure):
    kind: FailureKind = "destination_unavailable"


class MissingCachedMaterial(IdentityFailure):
    kind: FailureKind = "missing_cached_material"


class MaterializationFailed(IdentityFailure):
    kind: FailureKind = "materialization_failed"


class EngineFault(MaterializerError):
    """Unrecoverable for the current invocation."""


class CacheUnconfigured(EngineFault):
    pass


class CacheWriteFailed(EngineFault):
    pass


class PermissionEnforcementFailed(EngineFault):
    def __init__(self, operation: str, path: str) -> None:
        super().__init__(f"Failed to set {path} {operation}")
        self.operation = operation
        self.path = path


class KeyMaterialError(MaterializerError):
    """Raised by a KeyMaterialProvider when keytab bytes cannot be produced or moved."""
