"""KeyMaterialProvider — the seam to whatever actually produces keytab bytes.

Generating key material (talking to a KDC, deriving keys, encoding the keytab
format) is implementation specific, so generate() is abstract. Moving finished
keytab bytes around is not: the file helpers below work on raw bytes and can
be overridden by providers that need to re-encode on the way through.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from keytab_materializer.errors import KeyMaterialError

logger = logging.getLogger(__name__)


class KeyMaterialProvider(ABC):
    @abstractmethod
    def generate(self, principal: str, password: str, key_version: int | None) -> bytes:
        """Return keytab bytes for *principal*.

        Raises:
            KeyMaterialError: if the key material cannot be produced.
        """
        ...

    def materialize_to_file(self, keytab: bytes, destination: str | Path) -> None:
        """Write *keytab* to *destination*, replacing any existing file."""
        if not keytab:
            raise KeyMaterialError(f"refusing to write an empty keytab to {destination}")
        try:
            Path(destination).write_bytes(keytab)
        except OSError as e:
            raise KeyMaterialError(f"could not write keytab to {destination}: {e}") from e
        logger.debug("Wrote %d keytab bytes to %s", len(keytab), destination)

    def read_keytab_file(self, path: str | Path) -> bytes:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise KeyMaterialError(f"could not read keytab {path}: {e}") from e
        if not data:
            raise KeyMaterialError(f"keytab {path} is empty")
        return data

    def copy_keytab_file(self, source: str | Path, destination: str | Path) -> None:
        """Copy a keytab verbatim from *source* to *destination*."""
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise KeyMaterialError(
                f"could not copy keytab {source} to {destination}: {e}"
            ) from e
