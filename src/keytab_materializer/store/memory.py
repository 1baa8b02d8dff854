"""InMemoryPrincipalStore — dict-backed PrincipalStore for tests and dry runs."""

from __future__ import annotations

from keytab_materializer.model.identity import CacheEntry
from keytab_materializer.store.base import PrincipalStore


class InMemoryPrincipalStore(PrincipalStore):
    def __init__(
        self,
        entries: list[CacheEntry] | None = None,
        provisioned: dict[str, set[str]] | None = None,  # principal → hosts
    ) -> None:
        self._entries = {e.principal_name: e for e in entries or []}
        self._provisioned = {p: set(h) for p, h in (provisioned or {}).items()}

    def find_cache_entry(self, principal: str) -> CacheEntry | None:
        entry = self._entries.get(principal)
        # hand out copies so callers must go through update_cache_entry
        return entry.model_copy() if entry else None

    def update_cache_entry(self, entry: CacheEntry) -> None:
        self._entries[entry.principal_name] = entry.model_copy()

    def principal_provisioned_on_host(self, principal: str, host: str) -> bool:
        return host in self._provisioned.get(principal, set())

    def mark_provisioned(self, principal: str, host: str) -> None:
        self._provisioned.setdefault(principal, set()).add(host)
