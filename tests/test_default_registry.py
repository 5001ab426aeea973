"""Tests for the lazily created process-wide registry."""

import threading

from dispatcher import Registry, get_default_registry
from dispatcher import registry as registry_module


def test_default_registry_is_shared(monkeypatch):
    monkeypatch.setattr(registry_module, "_default_registry", None)

    first = get_default_registry()
    second = get_default_registry()

    assert isinstance(first, Registry)
    assert first is second


def test_default_registry_created_once_across_threads(monkeypatch):
    monkeypatch.setattr(registry_module, "_default_registry", None)
    seen = []

    def grab():
        seen.append(get_default_registry())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert all(r is seen[0] for r in seen)


def test_default_registry_reads_environment(monkeypatch):
    monkeypatch.setattr(registry_module, "_default_registry", None)
    monkeypatch.setenv("DISPATCHER_SILENT", "true")

    assert get_default_registry().silent is True
    assert get_default_registry().publish("ghost", 1) is None
