"""PyYAML loader → typed config dataclasses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class MongoConfig:
    uri: str = "mongodb://localhost:27017"
    db: str = "keytab_materializer"


@dataclass
class MaterializerConfig:
    data_directory: str = "/var/lib/keytab-materializer/data"
    keytab_cache_dir: str | None = None  # unset = caching disabled, store() faults
    mongo: MongoConfig = field(default_factory=MongoConfig)
    log_level: str = "INFO"

    def data_directory_path(self) -> Path:
        return Path(self.data_directory)

    def cache_directory_path(self) -> Path | None:
        if not self.keytab_cache_dir:
            return None
        return Path(self.keytab_cache_dir)


def load_config(path: str | Path | None = None) -> MaterializerConfig:
    """Load materializer.yaml and return a typed MaterializerConfig.

    Falls back to defaults if the file is absent or a section is missing.
    Environment variables KEYTAB_DATA_DIR, KEYTAB_CACHE_DIR, MONGO_URI,
    MONGO_DB and KEYTAB_LOG_LEVEL override whatever the file says.
    """
    raw: dict = {}
    if path is None:
        path = Path(__file__).parent.parent.parent / "config" / "materializer.yaml"

    resolved = Path(path)
    if resolved.exists():
        with resolved.open() as f:
            raw = yaml.safe_load(f) or {}

    keytabs_raw = raw.get("keytabs", {})
    mongo_raw = raw.get("mongo", {})
    logging_raw = raw.get("logging", {})

    defaults = MaterializerConfig()
    return MaterializerConfig(
        data_directory=os.getenv(
            "KEYTAB_DATA_DIR", keytabs_raw.get("data_directory", defaults.data_directory)
        ),
        keytab_cache_dir=os.getenv("KEYTAB_CACHE_DIR", keytabs_raw.get("cache_directory")),
        mongo=MongoConfig(
            uri=os.getenv("MONGO_URI", mongo_raw.get("uri", defaults.mongo.uri)),
            db=os.getenv("MONGO_DB", mongo_raw.get("db", defaults.mongo.db)),
        ),
        log_level=os.getenv("KEYTAB_LOG_LEVEL", logging_raw.get("level", defaults.log_level)),
    )
