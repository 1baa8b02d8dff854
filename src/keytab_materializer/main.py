"""Application factory — wires config, persistence and the engine into a runner."""

from __future__ import annotations

import logging

from pymongo import MongoClient

from keytab_materializer.cache.keytab_cache import KeytabCache
from keytab_materializer.config import MaterializerConfig, load_config
from keytab_materializer.engine import IdentityMaterializationEngine
from keytab_materializer.provider.base import KeyMaterialProvider
from keytab_materializer.runner import InvocationRunner
from keytab_materializer.store.base import PrincipalStore
from keytab_materializer.store.principals import MongoPrincipalStore


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_mongo_store(config: MaterializerConfig) -> MongoPrincipalStore:
    client: MongoClient = MongoClient(config.mongo.uri)  # type: ignore[type-arg]
    store = MongoPrincipalStore(client[config.mongo.db])
    store.ensure_indexes()
    return store


def create_runner(
    provider: KeyMaterialProvider,
    config: MaterializerConfig | None = None,
    store: PrincipalStore | None = None,
) -> InvocationRunner:
    """Build a runner with a fresh engine, i.e. one per invocation.

    Uses the Mongo-backed store from config unless *store* is given.
    """
    if config is None:
        config = load_config()
    if store is None:
        store = create_mongo_store(config)

    configure_logging(config.log_level)
    cache = KeytabCache(store, config.cache_directory_path())
    engine = IdentityMaterializationEngine(
        config.data_directory_path(), store, cache, provider
    )
    return InvocationRunner(engine)
