from __future__ import annotations

import enum
import importlib
import inspect
from concurrent.futures import Future

from callback_promisify import PromisifiedCallable, promisify, scan


def test_object_is_not_mutated():
    def a(cb):
        cb(None, "a")

    original = {"a": a}

    result = promisify(original, None, True)

    assert result is not original
    assert result["a"] is not a
    assert original["a"] is a
    assert list(original) == ["a"]
    assert result["a"]().result(timeout=1) == "a"


def test_function_properties_are_not_mutated():
    def a(cb):
        cb(None, 1)

    def inner(cb):
        cb(None, 2)

    a.inner = inner

    b = promisify(a, no_mutate=True)

    assert b().result(timeout=1) == 1
    assert b.inner().result(timeout=1) == 2
    assert a.inner is inner
    assert b.inner is not inner
    assert b is not a


def test_plain_functions_are_cloned():
    def plain(x):
        return x + 1

    plain.tag = "kept"
    result = promisify({"plain": plain}, no_mutate=True)

    cloned = result["plain"]
    assert cloned is not plain
    assert cloned(1) == 2
    assert cloned.tag == "kept"
    cloned.tag = "changed"
    assert plain.tag == "kept"


def test_constructor_is_not_mutated():
    class A:
        @staticmethod
        def make(cb):
            cb(None, "static")

        def fetch(self, cb):
            cb(None, "proto")

    original_fetch = A.__dict__["fetch"]
    original_make = A.__dict__["make"]

    B = promisify(A, no_mutate=True)
    b = B()

    assert B is not A
    assert isinstance(b, A)
    assert B.make().result(timeout=1) == "static"
    assert b.fetch().result(timeout=1) == "proto"
    assert A.__dict__["fetch"] is original_fetch
    assert A.__dict__["make"] is original_make


def test_nested_records_are_copied():
    def fn(cb):
        cb(None, "nested")

    inner = {"fn": fn}
    outer = {"inner": inner, "count": 2}

    result = promisify(outer, no_mutate=True)

    assert result["inner"] is not inner
    assert inner["fn"] is fn
    assert result["count"] == 2
    assert result["inner"]["fn"]().result(timeout=1) == "nested"


def test_shared_references_stay_shared_without_mutation():
    def fn(cb):
        cb(None, 1)

    shared = {"fn": fn}
    root = {"left": shared, "right": shared, "direct": fn, "alias": fn}

    result = promisify(root, no_mutate=True)

    assert result["left"] is result["right"]
    assert result["direct"] is result["alias"]
    assert result["left"]["fn"] is result["direct"]


def test_module_name_defaults_to_no_mutate(fixture_module):
    name = fixture_module("cbp_fixture_resolve")

    first = promisify(name)
    second = promisify(name)
    direct = importlib.import_module(name)

    assert first is not direct
    assert first.fetch(3).result(timeout=1) == 6
    assert second.fetch(4).result(timeout=1) == 8
    assert first.Client().get("k").result(timeout=1) == {"key": "k"}
    # The module every other importer sees keeps its callback-style API.
    assert not isinstance(direct.fetch, PromisifiedCallable)
    assert list(inspect.signature(direct.fetch).parameters) == ["key", "callback"]
    assert not isinstance(direct.Client.__dict__["get"], PromisifiedCallable)
    assert direct.helper(5) == 5
    # Imported foreign modules are shared, not walked.
    assert first.json is direct.json


def test_module_name_with_explicit_mutation(fixture_module):
    name = fixture_module("cbp_fixture_mutate")

    result = promisify(name, no_mutate=False)
    direct = importlib.import_module(name)

    assert result is direct
    assert direct.fetch(1).result(timeout=1) == 2


class _Color(enum.Enum):
    RED = 1
    GREEN = 2


def test_enum_classes_are_walked_without_mutation():
    original_members = dict(_Color.__members__)

    result = promisify({"Color": _Color}, None, True)

    cloned = result["Color"]
    assert cloned is not _Color
    assert cloned(1) is _Color.RED
    assert cloned.GREEN is _Color.GREEN
    assert dict(_Color.__members__) == original_members


def test_enum_module_can_be_scanned():
    report = {r.path: r for r in scan("enum")}

    assert "Enum" in report
    assert report["Enum"].kind == "class"
    assert not isinstance(enum.Enum.__dict__["_missing_"].__func__, PromisifiedCallable)


def test_later_calls_do_not_change_earlier_results():
    class A:
        def m(self, x, cb):
            cb(None, x)

        def n(self, x):
            return x

    first = promisify(A, None, True)
    second = promisify(A, lambda fn, key, parent: key == "n", True)

    assert first is not second
    assert first().n(3) == 3
    assert first().m(4).result(timeout=1) == 4

    seen = []
    assert second().m(5, lambda err, value: seen.append(value)) is None
    assert seen == [5]
    assert isinstance(second().n(6), Future)
    assert not isinstance(A.__dict__["m"], PromisifiedCallable)
    assert not isinstance(A.__dict__["n"], PromisifiedCallable)


class _Doubler:
    def __call__(self, x):
        return x * 2


def test_cloned_members_keep_their_binding_behaviour():
    class K:
        size = len
        twice = _Doubler()

        def name(self):
            return type(self).__name__

    K2 = promisify(K, None, True)
    instance = K2()

    assert instance.size([1, 2, 3]) == 3
    assert instance.twice(4) == 8
    assert instance.name() == "K"
    assert K.__dict__["size"] is len
