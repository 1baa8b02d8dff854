"""Destination layout for delivered keytabs.

    data_directory
    |- host1
    |  |- 16a054404c8826cd604a27ac970e8cc4b9c7a3fa   (keytab file)
    |  |- a3c09cae73406912e8c55296d1c85b674d24f576   (keytab file)
    |- host2
    |  |- ...

The file name is the SHA-1 hex digest of the keytab's destination path on the
target host. It is only a stable, filesystem-safe name, not a secret.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from keytab_materializer.errors import DestinationUnavailable


def sha1_hex(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def host_directory(data_dir: str | Path, host: str) -> Path:
    """Return data_dir/host, refusing host names that would leave data_dir.

    Raises:
        DestinationUnavailable: if *host* is absolute, contains a path
            separator, or is "." or "..".
    """
    separators = [s for s in (os.sep, os.altsep) if s]
    if (
        host in (".", "..")
        or os.path.isabs(host)
        or any(s in host for s in separators)
    ):
        raise DestinationUnavailable(
            f"Refusing host name {host!r}, it does not name a directory under {data_dir}"
        )
    return Path(data_dir) / host


def resolve(data_dir: str | Path, host: str, destination_path: str) -> Path:
    """Return data_dir/host/sha1hex(destination_path)."""
    return host_directory(data_dir, host) / sha1_hex(destination_path)
