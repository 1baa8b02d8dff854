"""InvocationRunner — feeds an ordered batch of identities through one engine.

Per-identity failures are collected and do not stop the batch. The report's
message is the last failure message, which is what the upstream framework
shows as the failure text. EngineFault subclasses abort the batch.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from keytab_materializer.engine import IdentityMaterializationEngine
from keytab_materializer.model.identity import IdentityEntry
from keytab_materializer.model.result import InvocationReport

logger = logging.getLogger(__name__)


class InvocationRunner:
    def __init__(self, engine: IdentityMaterializationEngine) -> None:
        self._engine = engine

    def run(
        self,
        entries: Iterable[IdentityEntry],
        passwords: Mapping[str, str],
        key_versions: Mapping[str, int],
    ) -> InvocationReport:
        """Materialize every entry in order and return the combined report."""
        passwords = MappingProxyType(dict(passwords))
        key_versions = MappingProxyType(dict(key_versions))
        report = InvocationReport()

        for entry in entries:
            result = self._engine.materialize(
                entry.identity, entry.principal, passwords, key_versions
            )
            report.results.append(result)
            if not result.succeeded:
                report.status = "failed"
                report.message = result.message

        logger.info(
            "Processed %d keytab identities, %d failed",
            len(report.results),
            len(report.failures),
        )
        return report
