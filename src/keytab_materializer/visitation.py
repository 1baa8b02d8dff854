"""VisitationTracker — per-invocation memory of which keytabs were already handled."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class VisitationTracker:
    """Maps principal → set of "host|destination_path" keys seen in this invocation.

    Lives exactly as long as one engine instance. Nothing here is persisted or
    shared, so no locking is needed.
    """

    visited: dict[str, set[str]] = field(default_factory=dict)

    @staticmethod
    def key(host: str, destination_path: str) -> str:
        return f"{host}|{destination_path}"

    def has_principal(self, principal: str) -> bool:
        return principal in self.visited

    def is_visited(self, principal: str, host: str, destination_path: str) -> bool:
        return self.key(host, destination_path) in self.visited.get(principal, set())

    def mark(self, principal: str, host: str, destination_path: str) -> None:
        self.visited.setdefault(principal, set()).add(self.key(host, destination_path))
