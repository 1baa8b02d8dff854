"""MongoPrincipalStore — PyMongo CRUD for principal cache entries and host deployments."""

from __future__ import annotations

from pymongo.database import Database

from keytab_materializer.model.identity import CacheEntry
from keytab_materializer.store.base import PrincipalStore

PRINCIPALS_COLLECTION = "kerberos_principals"
PRINCIPAL_HOSTS_COLLECTION = "kerberos_principal_hosts"


class MongoPrincipalStore(PrincipalStore):
    def __init__(self, db: Database) -> None:  # type: ignore[type-arg]
        self._principals = db[PRINCIPALS_COLLECTION]
        self._hosts = db[PRINCIPAL_HOSTS_COLLECTION]

    def ensure_indexes(self) -> None:
        self._principals.create_index([("principal_name", 1)], unique=True)
        self._hosts.create_index([("principal_name", 1), ("host", 1)], unique=True)

    def find_cache_entry(self, principal: str) -> CacheEntry | None:
        doc = self._principals.find_one({"principal_name": principal}, {"_id": 0})
        return CacheEntry(**doc) if doc else None

    def update_cache_entry(self, entry: CacheEntry) -> None:
        doc = entry.model_dump(mode="json")
        self._principals.update_one(
            {"principal_name": entry.principal_name}, {"$set": doc}, upsert=True
        )

    def principal_provisioned_on_host(self, principal: str, host: str) -> bool:
        return self._hosts.count_documents(
            {"principal_name": principal, "host": host}, limit=1
        ) > 0
