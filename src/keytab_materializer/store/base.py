"""Abstract base class for principal persistence backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from keytab_materializer.model.identity import CacheEntry


class PrincipalStore(ABC):
    @abstractmethod
    def find_cache_entry(self, principal: str) -> CacheEntry | None:
        """Return the persisted entry for *principal*, or None if it is unknown."""
        ...

    @abstractmethod
    def update_cache_entry(self, entry: CacheEntry) -> None:
        """Insert or replace the entry keyed by entry.principal_name."""
        ...

    @abstractmethod
    def principal_provisioned_on_host(self, principal: str, host: str) -> bool:
        """True if *principal*'s keytab is already recorded as deployed on *host*."""
        ...
