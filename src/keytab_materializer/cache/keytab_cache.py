"""KeytabCache — cached originals of generated keytabs, keyed by principal.

The current cache file for a principal is recorded on its CacheEntry in the
PrincipalStore. The files themselves live flat under the configured cache
directory, named sha1hex(principal + creation time in millis). The time salt
only keeps repeated caching of one principal from colliding on a name.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from keytab_materializer.destination import sha1_hex
from keytab_materializer.errors import CacheUnconfigured, CacheWriteFailed
from keytab_materializer.fs.secure import enforce_owner_only, ensure_directory
from keytab_materializer.model.identity import CacheEntry
from keytab_materializer.store.base import PrincipalStore

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class KeytabCache:
    def __init__(
        self,
        store: PrincipalStore,
        cache_directory: Path | None,
        clock: Callable[[], int] = _now_millis,
    ) -> None:
        self._store = store
        self._cache_directory = cache_directory
        self._clock = clock

    def lookup(self, principal: str) -> str | None:
        entry = self._store.find_cache_entry(principal)
        return entry.cached_keytab_path if entry else None

    def store(self, principal: str, keytab: bytes) -> str | None:
        """Write *keytab* to a new owner-only cache file and return its absolute path.

        Returns None if the file is somehow absent after writing. Raises
        CacheUnconfigured when no cache directory is configured and
        CacheWriteFailed when the directory or file cannot be created.
        """
        cache_dir = self._cache_directory
        if cache_dir is None:
            message = "The Kerberos keytab cache directory is not configured"
            logger.error(message)
            raise CacheUnconfigured(message)

        if not ensure_directory(cache_dir):
            message = f"Failed to create the keytab cache directory {cache_dir.absolute()}"
            logger.error(message)
            raise CacheWriteFailed(message)

        cache_file = cache_dir / sha1_hex(f"{principal}{self._clock()}")
        try:
            cache_file.write_bytes(keytab)
        except OSError as e:
            message = (
                f"Failed to write the keytab for {principal} to the cache location "
                f"({cache_file.absolute()})"
            )
            logger.error(message, exc_info=True)
            raise CacheWriteFailed(message) from e

        enforce_owner_only(cache_file)
        return str(cache_file.absolute()) if cache_file.exists() else None

    def replace(self, principal: str, new_path: str | None) -> str | None:
        """Record *new_path* as the principal's current cache file.

        Returns the previously recorded path when it differs from *new_path*,
        so the caller can discard it. A principal without an entry gets a new
        non-service one; only non-service principals are ever cached.
        """
        entry = self._store.find_cache_entry(principal)
        if entry is None:
            entry = CacheEntry(principal_name=principal, is_service=False)

        previous = entry.cached_keytab_path
        entry.cached_keytab_path = new_path
        self._store.update_cache_entry(entry)

        if previous is None or previous == new_path:
            return None
        return previous

    def discard(self, path: str) -> None:
        """Delete an orphaned cache file. Failure leaks the file but is not an error."""
        try:
            Path(path).unlink()
        except OSError as e:
            logger.debug("Failed to remove orphaned cache file %s: %s", path, e)
