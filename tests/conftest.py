"""Shared pytest fixtures for the keytab materializer test suite."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any, Callable

import pytest

from keytab_materializer.cache.keytab_cache import KeytabCache
from keytab_materializer.engine import IdentityMaterializationEngine
from keytab_materializer.errors import KeyMaterialError
from keytab_materializer.model.identity import IdentityRecord
from keytab_materializer.provider.base import KeyMaterialProvider
from keytab_materializer.store.memory import InMemoryPrincipalStore


class FakeKeyMaterialProvider(KeyMaterialProvider):
    """Deterministic provider: keytab bytes encode the inputs, failures are switchable."""

    def __init__(self) -> None:
        self.generated: list[tuple[str, str, int | None]] = []
        self.fail_generate = False
        self.fail_write = False

    def generate(self, principal: str, password: str, key_version: int | None) -> bytes:
        if self.fail_generate:
            raise KeyMaterialError("KDC unreachable")
        self.generated.append((principal, password, key_version))
        return f"KEYTAB|{principal}|{password}|{key_version}|{len(self.generated)}".encode()

    def materialize_to_file(self, keytab: bytes, destination: str | Path) -> None:
        if self.fail_write:
            raise KeyMaterialError("disk full")
        super().materialize_to_file(keytab, destination)


# ---------------------------------------------------------------------------
# Filesystem fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    # deliberately not created; the cache creates it on first use
    return tmp_path / "cache"


# ---------------------------------------------------------------------------
# Collaborator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def provider() -> FakeKeyMaterialProvider:
    return FakeKeyMaterialProvider()


@pytest.fixture
def store() -> InMemoryPrincipalStore:
    return InMemoryPrincipalStore()


@pytest.fixture
def clock() -> Callable[[], int]:
    """Strictly increasing millisecond clock so cache file names never collide."""
    counter = itertools.count(1_700_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def keytab_cache(
    store: InMemoryPrincipalStore, cache_dir: Path, clock: Callable[[], int]
) -> KeytabCache:
    return KeytabCache(store, cache_dir, clock=clock)


@pytest.fixture
def make_engine(
    data_dir: Path,
    store: InMemoryPrincipalStore,
    keytab_cache: KeytabCache,
    provider: FakeKeyMaterialProvider,
) -> Callable[..., IdentityMaterializationEngine]:
    """Factory: a fresh engine (one invocation) over the shared store, cache and provider."""

    def _factory(**kwargs: Any) -> IdentityMaterializationEngine:
        defaults: dict[str, Any] = {
            "data_directory": data_dir,
            "store": store,
            "cache": keytab_cache,
            "provider": provider,
        }
        defaults.update(kwargs)
        return IdentityMaterializationEngine(**defaults)

    return _factory


@pytest.fixture
def engine(make_engine: Callable[..., IdentityMaterializationEngine]) -> IdentityMaterializationEngine:
    return make_engine()


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_identity() -> Callable[..., IdentityRecord]:
    """Factory: create an IdentityRecord with sensible defaults, override via kwargs."""

    def _factory(**kwargs: Any) -> IdentityRecord:
        defaults: dict[str, Any] = {
            "host": "h1",
            "destination_path": "/etc/security/keytabs/hdfs.headless.keytab",
            "cachable": True,
        }
        defaults.update(kwargs)
        return IdentityRecord(**defaults)

    return _factory
