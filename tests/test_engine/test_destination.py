"""Unit tests for the destination resolver."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from keytab_materializer import destination
from keytab_materializer.errors import DestinationUnavailable


def test_resolve_uses_sha1_of_destination_path() -> None:
    path = "/etc/security/keytabs/hdfs.headless.keytab"
    expected = hashlib.sha1(path.encode()).hexdigest()
    assert destination.resolve("/data", "h1", path) == Path("/data") / "h1" / expected


def test_resolve_is_deterministic() -> None:
    a = destination.resolve("/data", "h1", "/etc/krb5.keytab")
    b = destination.resolve(Path("/data"), "h1", "/etc/krb5.keytab")
    assert a == b


def test_distinct_hosts_do_not_collide() -> None:
    a = destination.resolve("/data", "h1", "/etc/krb5.keytab")
    b = destination.resolve("/data", "h2", "/etc/krb5.keytab")
    assert a != b
    assert a.name == b.name


def test_sha1_hex_is_filesystem_safe() -> None:
    name = destination.sha1_hex("/etc/../weird path/with spaces.keytab")
    assert len(name) == 40
    assert all(c in "0123456789abcdef" for c in name)


@pytest.mark.parametrize("host", [".", "..", "/abs/host", "a/b"])
def test_host_outside_data_directory_rejected(host: str) -> None:
    with pytest.raises(DestinationUnavailable):
        destination.resolve("/data", host, "/etc/krb5.keytab")
