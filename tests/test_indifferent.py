import json
from enum import Enum

from gorgon.indifferent import IndifferentDict, canonical_key, indifferent


class Key(Enum):
    TITLE = "title"
    COUNT = 3


def test_enum_and_string_keys_are_interchangeable():
    d = IndifferentDict()
    d[Key.TITLE] = "Results"
    assert d["title"] == "Results"
    assert Key.TITLE in d
    assert d.get(Key.TITLE) == "Results"
    assert list(d.keys()) == ["title"]

    d["title"] = "Replaced"
    assert d[Key.TITLE] == "Replaced"
    assert len(d) == 1


def test_canonical_key_uses_name_for_non_string_values():
    assert canonical_key(Key.COUNT) == "COUNT"
    assert canonical_key("x") == "x"
    assert canonical_key(7) == 7


def test_nested_mappings_become_indifferent():
    d = IndifferentDict({"results": {"county": {"name": "Cook"}}, "rows": [{"a": 1}]})
    assert isinstance(d["results"], IndifferentDict)
    assert isinstance(d["results"]["county"], IndifferentDict)
    assert isinstance(d["rows"][0], IndifferentDict)
    assert d.dig("results", "county", "name") == "Cook"
    assert d.dig("results", "missing", "name") is None


def test_indifferent_leaves_scalars_alone_and_serializes():
    assert indifferent(5) == 5
    assert indifferent(("a", {"b": 1}))[1]["b"] == 1
    d = IndifferentDict(a=1, b={"c": [1, 2]})
    assert json.loads(json.dumps(d)) == {"a": 1, "b": {"c": [1, 2]}}


def test_setdefault_pop_and_copy():
    d = IndifferentDict()
    assert d.setdefault(Key.TITLE, "first") == "first"
    assert d.setdefault("title", "second") == "first"
    copy = d.copy()
    assert isinstance(copy, IndifferentDict)
    assert d.pop(Key.TITLE) == "first"
    assert "title" not in d
    assert copy["title"] == "first"


def test_nested_indifferent_dicts_are_copied():
    meta = IndifferentDict(title="A")
    d = IndifferentDict(meta=meta)
    meta["title"] = "changed"
    assert d["meta"]["title"] == "A"
    assert d["meta"] is not meta
