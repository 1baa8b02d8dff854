"""Unit tests for VisitationTracker."""

from __future__ import annotations

from keytab_materializer.visitation import VisitationTracker


def test_empty_tracker() -> None:
    tracker = VisitationTracker()
    assert not tracker.has_principal("hdfs@EXAMPLE.COM")
    assert not tracker.is_visited("hdfs@EXAMPLE.COM", "h1", "/etc/a.keytab")


def test_mark_then_visited() -> None:
    tracker = VisitationTracker()
    tracker.mark("hdfs@EXAMPLE.COM", "h1", "/etc/a.keytab")
    assert tracker.has_principal("hdfs@EXAMPLE.COM")
    assert tracker.is_visited("hdfs@EXAMPLE.COM", "h1", "/etc/a.keytab")


def test_triple_is_the_unit() -> None:
    tracker = VisitationTracker()
    tracker.mark("hdfs@EXAMPLE.COM", "h1", "/etc/a.keytab")
    assert not tracker.is_visited("hdfs@EXAMPLE.COM", "h2", "/etc/a.keytab")
    assert not tracker.is_visited("hdfs@EXAMPLE.COM", "h1", "/etc/b.keytab")
    assert not tracker.is_visited("yarn@EXAMPLE.COM", "h1", "/etc/a.keytab")


def test_key_format() -> None:
    assert VisitationTracker.key("h1", "/etc/a.keytab") == "h1|/etc/a.keytab"
