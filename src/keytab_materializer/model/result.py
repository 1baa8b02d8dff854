"""MaterializationResult and InvocationReport Pydantic models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FailureKind = Literal[
    "destination_unavailable",
    "missing_cached_material",
    "materialization_failed",
]
Action = Literal[
    "noop",
    "skipped_visited",
    "skipped_provisioned",
    "copied_from_cache",
    "restored_from_cache",
    "generated",
]
Status = Literal["success", "failed"]


class MaterializationResult(BaseModel):
    """Outcome of one engine call for a single (principal, host, destination) triple."""

    principal: str
    host: str
    destination_path: str
    status: Status = "success"
    action: Action | None = None
    failure_kind: FailureKind | None = None
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


class InvocationReport(BaseModel):
    """Per-identity results for one invocation, plus the composed failure text."""

    results: list[MaterializationResult] = Field(default_factory=list)
    status: Literal["completed", "failed"] = "completed"
    message: str | None = None  # last failure message, if any

    @property
    def failures(self) -> list[MaterializationResult]:
        return [r for r in self.results if not r.succeeded]
