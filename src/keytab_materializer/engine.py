"""IdentityMaterializationEngine — turns one identity record into a keytab on disk.

For each (principal, host, destination) triple the engine picks one path:

    already visited this invocation        → skip
    no password, provisioned on host       → skip, the keytab must already exist
    no password, cached keytab recorded    → copy the cached keytab
    no password, nothing cached            → MissingCachedMaterial
    password, principal seen before        → reuse the cached keytab if readable
    password, otherwise                    → generate, cache (non-service and
                                             cachable only), write

Delivered keytabs land in data_dir/<host>/<sha1(destination path)> and are
locked down to the owning user. Per-identity failures come back as failed
results; EngineFault subclasses propagate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from keytab_materializer import destination as dest
from keytab_materializer.cache.keytab_cache import KeytabCache
from keytab_materializer.errors import (
    DestinationUnavailable,
    IdentityFailure,
    KeyMaterialError,
    MaterializationFailed,
    MissingCachedMaterial,
)
from keytab_materializer.fs.secure import enforce_owner_only, ensure_directory
from keytab_materializer.model.identity import IdentityRecord
from keytab_materializer.model.result import Action, MaterializationResult
from keytab_materializer.provider.base import KeyMaterialProvider
from keytab_materializer.store.base import PrincipalStore
from keytab_materializer.visitation import VisitationTracker

logger = logging.getLogger(__name__)


class IdentityMaterializationEngine:
    """One instance per invocation; the visitation tracker is scoped to it."""

    def __init__(
        self,
        data_directory: str | Path,
        store: PrincipalStore,
        cache: KeytabCache,
        provider: KeyMaterialProvider,
        tracker: VisitationTracker | None = None,
    ) -> None:
        self._data_directory = Path(data_directory)
        self._store = store
        self._cache = cache
        self._provider = provider
        self._tracker = tracker if tracker is not None else VisitationTracker()

    @property
    def tracker(self) -> VisitationTracker:
        return self._tracker

    def materialize(
        self,
        identity: IdentityRecord,
        principal: str,
        passwords: Mapping[str, str],
        key_versions: Mapping[str, int],
    ) -> MaterializationResult:
        """Materialize the keytab for *principal* described by *identity*.

        Args:
            identity:      Host, destination path and cachable flag.
            principal:     Evaluated principal name.
            passwords:     principal → password for principals created in this run.
            key_versions:  principal → key version number.

        Returns:
            A success result (possibly a skip) or a failed result carrying the
            failure kind and message.

        Raises:
            EngineFault: cache misconfiguration or a permission lockdown failure.
        """
        host = identity.host
        destination_path = identity.destination_path
        result = MaterializationResult(
            principal=principal, host=host, destination_path=destination_path
        )

        if not host or not destination_path:
            result.action = "noop"
            return result

        if self._tracker.is_visited(principal, host, destination_path):
            logger.debug("Skipping previously processed keytab for %s on host %s", principal, host)
            result.action = "skipped_visited"
            return result

        principal_seen = self._tracker.has_principal(principal)
        try:
            result.action = self._process(
                identity, principal, passwords, key_versions, principal_seen
            )
        except IdentityFailure as e:
            logger.error("%s", e.message, exc_info=e.__cause__)
            result.status = "failed"
            result.failure_kind = e.kind
            result.message = e.message
        finally:
            # failed attempts are not retried within the same invocation
            self._tracker.mark(principal, host, destination_path)

        return result

    def _process(
        self,
        identity: IdentityRecord,
        principal: str,
        passwords: Mapping[str, str],
        key_versions: Mapping[str, int],
        principal_seen: bool,
    ) -> Action:
        host = identity.host
        logger.info("Creating keytab file for %s on host %s", principal, host)

        try:
            host_dir = dest.host_directory(self._data_directory, host)
        except DestinationUnavailable as e:
            raise DestinationUnavailable(
                f"Failed to create keytab file {identity.destination_path} for {principal} - {e}"
            ) from e
        if not ensure_directory(host_dir):
            raise DestinationUnavailable(
                f"Failed to create keytab file {identity.destination_path} for {principal}, "
                f"the container directory does not exist: {host_dir.absolute()}"
            )
        destination = dest.resolve(self._data_directory, host, identity.destination_path)

        password = passwords.get(principal)
        if password is None:
            return self._deliver_cached(identity, principal, destination)
        return self._deliver_with_password(
            identity, principal, password, key_versions.get(principal), principal_seen, destination
        )

    def _deliver_cached(
        self, identity: IdentityRecord, principal: str, destination: Path
    ) -> Action:
        if self._store.principal_provisioned_on_host(principal, identity.host):
            logger.debug(
                "Skipping keytab file for %s, missing password indicates nothing to do", principal
            )
            return "skipped_provisioned"

        cached_path = self._cache.lookup(principal)
        if cached_path is None:
            raise MissingCachedMaterial(
                f"Failed to create keytab file {identity.destination_path} for {principal}, "
                "missing cached file"
            )

        try:
            self._provider.copy_keytab_file(cached_path, destination)
        except KeyMaterialError as e:
            raise MaterializationFailed(
                f"Failed to create keytab file {identity.destination_path} for {principal} - {e}"
            ) from e

        enforce_owner_only(destination)
        logger.debug("Copied cached keytab for %s to %s", principal, destination)
        return "copied_from_cache"

    def _deliver_with_password(
        self,
        identity: IdentityRecord,
        principal: str,
        password: str,
        key_version: int | None,
        principal_seen: bool,
        destination: Path,
    ) -> Action:
        keytab: bytes | None = None
        action: Action = "generated"

        # A principal seen earlier in this run was generated then, so its
        # cached copy holds the same keys.
        if principal_seen:
            cached_path = self._cache.lookup(principal)
            if cached_path is not None:
                try:
                    keytab = self._provider.read_keytab_file(cached_path)
                    action = "restored_from_cache"
                except KeyMaterialError as e:
                    logger.warning(
                        "Failed to read the cached keytab for %s, recreating if possible - %s",
                        principal,
                        e,
                        exc_info=True,
                    )

        if keytab is None:
            try:
                keytab = self._provider.generate(principal, password, key_version)
            except KeyMaterialError as e:
                raise MaterializationFailed(
                    f"Failed to create keytab file {identity.destination_path} for {principal} - {e}"
                ) from e
            self._cache_generated(identity, principal, keytab)

        try:
            self._provider.materialize_to_file(keytab, destination)
        except KeyMaterialError as e:
            raise MaterializationFailed(
                f"Failed to create keytab file {identity.destination_path} for {principal} "
                f"at {destination.absolute()} - {e}"
            ) from e

        enforce_owner_only(destination)
        logger.debug(
            "Successfully created keytab file for %s at %s", principal, destination.absolute()
        )
        return action

    def _cache_generated(self, identity: IdentityRecord, principal: str, keytab: bytes) -> None:
        entry = self._store.find_cache_entry(principal)
        is_service = entry.is_service if entry else False
        if is_service or not identity.cachable:
            return

        cached_path = self._cache.store(principal, keytab)
        previous = self._cache.replace(principal, cached_path)
        if previous is not None:
            self._cache.discard(previous)
