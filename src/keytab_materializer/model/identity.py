"""IdentityRecord, IdentityEntry and CacheEntry Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class IdentityRecord(BaseModel):
    """Where a principal's keytab must land on one host. Read-only per invocation."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    destination_path: str = ""  # path of the keytab file on the target host
    cachable: bool = False


class IdentityEntry(BaseModel):
    """An evaluated principal paired with the identity record it was resolved for."""

    model_config = ConfigDict(frozen=True)

    principal: str  # e.g. "hdfs@EXAMPLE.COM"
    identity: IdentityRecord


class CacheEntry(BaseModel):
    """Persisted per-principal state: the current cached keytab file, if any."""

    principal_name: str
    cached_keytab_path: str | None = None
    is_service: bool = False
