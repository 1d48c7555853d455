# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import pytest

from jsondime.pointer import (
    Key, Index, END, Path, Missing,
    parse_pointer, render_pointer, resolve, resolve_mut,
    PointerError, MalformedPointer, KeyNotFound, KeyNotExist,
    IndexOutOfRange, InvalidIndex, NotContainer, CannotDeleteRoot,
    )
from jsondime.log import JsonDimeError


def test_parse_pointer_tokens():
    assert parse_pointer("") == Path()
    assert parse_pointer("/a/0/-") == Path([Key("a"), Index(0), END])
    assert parse_pointer("/a/01") == Path([Key("a"), Key("01")])
    assert parse_pointer("/") == Path([Key("")])
    assert parse_pointer("//") == Path([Key(""), Key("")])


def test_parse_pointer_escapes():
    assert parse_pointer("/a~1b") == Path(["a/b"])
    assert parse_pointer("/m~0n") == Path(["m~n"])
    # ~1 is unescaped before ~0
    assert parse_pointer("/~01") == Path(["~1"])
    assert parse_pointer("/~10") == Path(["/0"])


@pytest.mark.parametrize("pointer", ["a", "a/b", "~1"])
def test_parse_pointer_malformed(pointer):
    with pytest.raises(MalformedPointer):
        parse_pointer(pointer)


def test_parse_pointer_not_a_string():
    with pytest.raises(MalformedPointer):
        parse_pointer(5)


def test_render_pointer():
    assert render_pointer(Path()) == ""
    assert render_pointer(Path(["a/b", 0, "m~n"])) == "/a~1b/0/m~0n"
    assert render_pointer(Path(["a", END])) == "/a/-"
    assert render_pointer("/x/1") == "/x/1"


@pytest.mark.parametrize("pointer", [
    "", "/", "/a", "/a/0", "/a~1b/c~0d", "/a/-", "/01/x", "/ /~0~1",
])
def test_pointer_roundtrip(pointer):
    assert render_pointer(parse_pointer(pointer)) == pointer


def test_path_display_form():
    assert str(Path()) == "/"
    assert str(Path(["a", 0])) == "/a/0"
    assert str(Path(["a", "0"])) == "/a/\\0"
    assert str(Path(["-"])) == "/\\-"
    assert str(Path([END])) == "/-"
    assert str(Path(["a/b"])) == "/a~1b"


def test_path_navigation():
    p = Path(["a", 1, "b"])
    assert p.parent == Path(["a", 1])
    assert p.last == Key("b")
    assert Path().parent is None
    assert Path().last is None
    assert p.child(2) == Path(["a", 1, "b", 2])
    assert p[:1] == Path(["a"])
    assert isinstance(p[:1], Path)
    assert p[1] == Index(1)
    assert Path(["a"]) + ["b"] == Path(["a", "b"])


def test_path_prefix():
    assert Path().is_prefix_of(Path(["a"]))
    assert Path(["a"]).is_prefix_of(Path(["a"]))
    assert Path(["a"]).is_prefix_of(Path(["a", 0]))
    assert not Path(["a", 0]).is_prefix_of(Path(["a"]))
    assert not Path(["a"]).is_prefix_of(Path(["b", 0]))
    # A key is not an index
    assert not Path(["0"]).is_prefix_of(Path([0, "x"]))


def test_path_ordering():
    paths = [Path(["b"]), Path([1]), Path(["a", 2]), Path(["a", 10]), Path()]
    assert sorted(paths) == [
        Path(), Path(["a", 2]), Path(["a", 10]), Path(["b"]), Path([1])]


def test_path_hashable():
    d = {Path(["a", 0]): 1}
    assert d[parse_pointer("/a/0")] == 1
    assert Path(["a", 0]) != Path(["a", "0"])


def test_invalid_tokens():
    with pytest.raises(TypeError):
        Index(-1)
    with pytest.raises(TypeError):
        Index(True)
    with pytest.raises(TypeError):
        Key(1)
    with pytest.raises(TypeError):
        Path([1.5])


def test_path_rejects_strings():
    with pytest.raises(TypeError):
        Path("/a")
    with pytest.raises(TypeError):
        Path(["a"]) + "bc"
    assert Path(["a"]) + ["bc"] == Path(["a", "bc"])
    assert Path.from_pointer("/a") == Path(["a"])


doc = {
    "foo": ["bar", "baz"],
    "": 0,
    "a/b": 1,
    "m~n": 8,
    "n": None,
    "nested": {"list": [{"x": 1}]},
}


@pytest.mark.parametrize("pointer, expected", [
    ("", doc),
    ("/foo", ["bar", "baz"]),
    ("/foo/0", "bar"),
    ("/", 0),
    ("/a~1b", 1),
    ("/m~0n", 8),
    ("/n", None),
    ("/nested/list/0/x", 1),
])
def test_resolve(pointer, expected):
    assert resolve(doc, pointer) == expected


def test_resolve_errors():
    with pytest.raises(KeyNotFound) as exc:
        resolve(doc, "/missing/x")
    assert exc.value.key == "missing"
    assert exc.value.path == Path(["missing"])

    with pytest.raises(IndexOutOfRange) as exc:
        resolve(doc, "/foo/2")
    assert exc.value.index == 2
    assert exc.value.length == 2
    assert "index: 2, len: 2" in str(exc.value)

    with pytest.raises(InvalidIndex):
        resolve(doc, "/foo/-")
    with pytest.raises(InvalidIndex):
        resolve(doc, "/foo/01")
    with pytest.raises(NotContainer):
        resolve(doc, "/foo/0/x")
    with pytest.raises(NotContainer):
        resolve(doc, "/n/x")


def test_error_hierarchy():
    assert KeyNotExist is KeyNotFound
    for cls in (MalformedPointer, KeyNotFound, IndexOutOfRange,
                InvalidIndex, NotContainer, CannotDeleteRoot):
        assert issubclass(cls, PointerError)
    assert issubclass(PointerError, JsonDimeError)
    assert issubclass(JsonDimeError, ValueError)


def test_object_entry_reference():
    d = {"a": 1}
    ref = resolve_mut(d, "/a")
    assert ref.get() == 1
    assert ref.replace(2) is d
    assert d == {"a": 2}

    ref = resolve_mut(d, "/b")
    assert ref.get() is Missing
    with pytest.raises(KeyNotExist):
        ref.replace(3)
    with pytest.raises(KeyNotExist):
        ref.delete()
    ref.insert(3)
    assert d == {"a": 2, "b": 3}

    assert resolve_mut(d, "/a").delete() == 2
    assert d == {"b": 3}


def test_object_entry_reference_numeric_key():
    d = {"1": "one"}
    ref = resolve_mut(d, "/1")
    assert ref.get() == "one"
    ref = resolve_mut(d, "/-")
    ref.set("dash")
    assert d == {"1": "one", "-": "dash"}


def test_array_slot_reference():
    a = [1, 2, 3]
    ref = resolve_mut(a, "/1")
    assert ref.get() == 2
    ref.set(20)
    assert a == [1, 20, 3]
    ref.insert(10)
    assert a == [1, 10, 20, 3]
    assert ref.delete() == 10
    assert a == [1, 20, 3]

    # Inserting at the length appends, setting there does not
    ref = resolve_mut(a, "/3")
    assert ref.get() is Missing
    with pytest.raises(IndexOutOfRange):
        ref.set(4)
    with pytest.raises(IndexOutOfRange):
        ref.delete()
    ref.insert(4)
    assert a == [1, 20, 3, 4]

    with pytest.raises(IndexOutOfRange):
        resolve_mut(a, "/9").insert(0)


def test_array_end_reference():
    a = [1]
    ref = resolve_mut(a, "/-")
    assert ref.get() is Missing
    ref.insert(2)
    assert a == [1, 2]
    with pytest.raises(InvalidIndex):
        ref.replace(3)
    assert ref.delete() == 2
    assert ref.delete() == 1
    with pytest.raises(IndexOutOfRange):
        ref.delete()


def test_array_reference_invalid_token():
    with pytest.raises(InvalidIndex):
        resolve_mut([1], "/x")


def test_root_reference():
    d = {"a": 1}
    ref = resolve_mut(d, "")
    assert ref.get() is d
    assert ref.set([1]) == [1]
    assert ref.replace(None) is None
    with pytest.raises(CannotDeleteRoot):
        ref.delete()


def test_reference_requires_parent():
    with pytest.raises(KeyNotFound):
        resolve_mut({"a": {}}, "/b/c")
    with pytest.raises(NotContainer):
        resolve_mut({"a": 1}, "/a/b")
