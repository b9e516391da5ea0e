from __future__ import annotations

import importlib

from callback_promisify import ClassificationRecord, scan


def test_scan_reports_paths_and_reasons():
    def get(key, callback):
        pass

    def size():
        return 0

    api = {"api": {"get": get, "size": size}}

    report = {r.path: r for r in scan(api)}

    assert set(report) == {"api.get", "api.size"}
    assert isinstance(report["api.get"], ClassificationRecord)
    assert report["api.get"].asynchronous
    assert report["api.get"].via == "signature"
    assert report["api.get"].callback_name == "callback"
    assert report["api.get"].parameters == ["key", "callback"]
    assert not report["api.size"].asynchronous
    assert report["api.size"].via == "none"
    # Scanning never modifies the input.
    assert api["api"]["get"] is get


def test_scan_module_by_name(fixture_module):
    name = fixture_module("cbp_fixture_scan")

    report = {r.path: r for r in scan(name)}
    module = importlib.import_module(name)

    assert set(report) == {"fetch", "explode", "helper", "Client", "Client.get"}
    assert report["Client"].kind == "class"
    assert report["Client.get"].asynchronous
    assert report["Client.get"].callback_name == "done"
    assert not report["helper"].asynchronous
    assert module.fetch.__name__ == "fetch"
    assert "get" in vars(module.Client)


def test_scan_with_predicate_records_the_reason():
    def anything(a):
        pass

    def skipped(cb):
        pass

    report = scan({"anything": anything, "skipped": skipped}, lambda fn, key, parent: key == "anything")

    assert [(r.path, r.via) for r in report] == [("anything", "predicate")]


def test_scan_visits_shared_callables_once():
    def fetch(cb):
        pass

    report = scan({"a": fetch, "b": fetch, "nested": {"c": fetch}})

    assert [r.path for r in report] == ["a"]
