# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Addressing of locations inside json documents.

A location is a :class:`Path`, an immutable sequence of tokens walked
from the document root. Tokens are :class:`Key` (object member),
:class:`Index` (array element) or :data:`END`, the "one past the last
element" marker that only appears as the last token of a write.

The serialized form of a path is a json pointer (RFC 6901) string,
see :func:`parse_pointer` and :func:`render_pointer`.
"""

import re

from .log import JsonDimeError
from .utils import json_kind, JsonKind


__all__ = [
    "Key", "Index", "END", "Path", "Missing",
    "parse_pointer", "render_pointer", "resolve", "resolve_mut",
    "PointerError", "MalformedPointer", "KeyNotFound", "KeyNotExist",
    "IndexOutOfRange", "InvalidIndex", "NotContainer", "CannotDeleteRoot",
    ]


# Sentinel to allow None as a value
Missing = object()


class PointerError(JsonDimeError):
    """Base class of addressing errors.

    The path attribute is the location where resolution failed.
    """
    def __init__(self, message, path=None):
        super(PointerError, self).__init__(message)
        self.path = path


class MalformedPointer(PointerError):
    pass


class KeyNotFound(PointerError):
    def __init__(self, key, path=None):
        super(KeyNotFound, self).__init__(
            "Key %r does not exist (at %s)" % (key, _location(path)), path)
        self.key = key


KeyNotExist = KeyNotFound


class IndexOutOfRange(PointerError):
    def __init__(self, index, length, path=None):
        super(IndexOutOfRange, self).__init__(
            "Index out of range (index: %s, len: %d) (at %s)" % (
                index, length, _location(path)), path)
        self.index = index
        self.length = length


class InvalidIndex(PointerError):
    pass


class NotContainer(PointerError):
    pass


class CannotDeleteRoot(PointerError):
    def __init__(self, path=None):
        super(CannotDeleteRoot, self).__init__("Cannot delete the document root", path)


def _location(path):
    if path is None:
        return "<unknown>"
    return render_pointer(path) or '""'


class Key(object):
    "Path token naming an object member."
    __slots__ = ("name",)

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError("Key name must be a string, got %r" % (name,))
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Key) and other.name == self.name

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Key, self.name))

    def __repr__(self):
        return "Key(%r)" % (self.name,)

    def _sort_key(self):
        return (0, self.name, 0)

    @property
    def text(self):
        return self.name


class Index(object):
    "Path token naming an array element."
    __slots__ = ("index",)

    def __init__(self, index):
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise TypeError("Index must be a non-negative integer, got %r" % (index,))
        self.index = index

    def __eq__(self, other):
        return isinstance(other, Index) and other.index == self.index

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Index, self.index))

    def __repr__(self):
        return "Index(%d)" % (self.index,)

    def _sort_key(self):
        return (1, "", self.index)

    @property
    def text(self):
        return str(self.index)


class _End(object):
    "Path token for the position after the last element of an array."
    __slots__ = ()

    def __eq__(self, other):
        return isinstance(other, _End)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(_End)

    def __repr__(self):
        return "END"

    def _sort_key(self):
        return (2, "", 0)

    @property
    def text(self):
        return "-"


END = _End()


_index_token = re.compile(r"^(0|[1-9][0-9]*)$")

# Keys that would read as an index or a marker in the display form
_reserved_key = re.compile(r"^([0-9]+|-|\\.*)$")


def _as_token(t):
    if isinstance(t, (Key, Index, _End)):
        return t
    if isinstance(t, str):
        return Key(t)
    if isinstance(t, int) and not isinstance(t, bool):
        return Index(t)
    raise TypeError("Invalid path token %r" % (t,))


def classify_token(text):
    """Classify an unescaped pointer token.

    Digit sequences without leading zero are indices, "-" is
    the END marker, anything else (including "01") is a key.
    """
    if text == "-":
        return END
    if _index_token.match(text):
        return Index(int(text))
    return Key(text)


def escape_token(text):
    return text.replace("~", "~0").replace("/", "~1")


def unescape_token(text):
    return text.replace("~1", "/").replace("~0", "~")


class Path(tuple):
    """An ordered sequence of path tokens, the empty path is the root.

    Plain strings and ints are accepted as tokens and converted
    to Key and Index respectively::

        Path(["a", 0]) == Path([Key("a"), Index(0)])

    A string is not a sequence of tokens here, use parse_pointer
    for pointer strings.
    """

    def __new__(cls, tokens=()):
        if isinstance(tokens, str):
            raise TypeError(
                "Path takes a sequence of tokens, not the string %r" % (tokens,))
        return super(Path, cls).__new__(cls, (_as_token(t) for t in tokens))

    @classmethod
    def from_pointer(cls, pointer):
        return parse_pointer(pointer)

    def to_pointer(self):
        return render_pointer(self)

    @property
    def parent(self):
        "The path of the parent location, None for the root."
        if not self:
            return None
        return Path(self[:-1])

    @property
    def last(self):
        "The last token, None for the root."
        if not self:
            return None
        return tuple.__getitem__(self, -1)

    def child(self, token):
        return Path(tuple(self) + (_as_token(token),))

    def is_prefix_of(self, other):
        "Return True if self is other or one of its ancestors."
        return len(self) <= len(other) and tuple(other[:len(self)]) == tuple(self)

    def __getitem__(self, item):
        result = tuple.__getitem__(self, item)
        if isinstance(item, slice):
            return Path(result)
        return result

    def __add__(self, other):
        return Path(tuple(self) + tuple(Path(other)))

    def _sort_key(self):
        return tuple(t._sort_key() for t in self)

    def __lt__(self, other):
        return self._sort_key() < Path(other)._sort_key()

    def __le__(self, other):
        return self._sort_key() <= Path(other)._sort_key()

    def __gt__(self, other):
        return self._sort_key() > Path(other)._sort_key()

    def __ge__(self, other):
        return self._sort_key() >= Path(other)._sort_key()

    def __eq__(self, other):
        return tuple.__eq__(self, other)

    def __ne__(self, other):
        return tuple.__ne__(self, other)

    def __hash__(self):
        return tuple.__hash__(self)

    def __str__(self):
        """Display form for humans, e.g. /a/0/\\1 for Key('a'), Index(0), Key('1')."""
        if not self:
            return "/"
        parts = []
        for t in self:
            text = escape_token(t.text)
            if isinstance(t, Key) and _reserved_key.match(t.name):
                text = "\\" + text
            parts.append(text)
        return "/" + "/".join(parts)

    def __repr__(self):
        return "Path(%r)" % (render_pointer(self),)


def parse_pointer(pointer):
    """Parse a json pointer string into a Path.

    Path instances are passed through unchanged.
    """
    if isinstance(pointer, Path):
        return pointer
    if not isinstance(pointer, str):
        raise MalformedPointer("Pointer must be a string, got %r" % (pointer,))
    if pointer == "":
        return Path()
    if not pointer.startswith("/"):
        raise MalformedPointer(
            "Pointer %r must be empty or start with '/'" % (pointer,))
    return Path(classify_token(unescape_token(part))
                for part in pointer.split("/")[1:])


def render_pointer(path):
    "Render a Path as a json pointer string, the root is the empty string."
    return "".join("/" + escape_token(t.text) for t in _as_path(path))


def _as_path(path):
    if isinstance(path, Path):
        return path
    if isinstance(path, str):
        return parse_pointer(path)
    return Path(path)


def _step(node, token, at):
    kind = json_kind(node)
    if kind == JsonKind.OBJECT:
        key = token.text
        if key not in node:
            raise KeyNotFound(key, at)
        return node[key]
    elif kind == JsonKind.ARRAY:
        index = _array_index(token, at)
        if index >= len(node):
            raise IndexOutOfRange(index, len(node), at)
        return node[index]
    raise NotContainer(
        "Cannot look up %r in a %s value (at %s)" % (token.text, kind, _location(at)), at)


def _array_index(token, at):
    if token == END:
        raise InvalidIndex(
            "The '-' index refers to a nonexistent element (at %s)" % _location(at), at)
    if not isinstance(token, Index):
        raise InvalidIndex(
            "%r is not a valid array index (at %s)" % (token.text, _location(at)), at)
    return token.index


def resolve(doc, path):
    """Return the value at path in doc.

    Raises KeyNotFound, IndexOutOfRange, InvalidIndex or NotContainer.
    """
    path = _as_path(path)
    node = doc
    for depth, token in enumerate(path):
        node = _step(node, token, path[:depth + 1])
    return node


def resolve_mut(doc, path):
    """Resolve path in doc to a transient MutableReference.

    All tokens but the last must exist. The location named by the
    last token does not have to exist yet.
    """
    path = _as_path(path)
    if not path:
        return RootRef(doc, path)
    parent = resolve(doc, path.parent)
    token = path.last
    kind = json_kind(parent)
    if kind == JsonKind.OBJECT:
        return ObjectEntryRef(doc, path, parent, token.text)
    elif kind == JsonKind.ARRAY:
        if token == END:
            return ArrayEndRef(doc, path, parent)
        return ArraySlotRef(doc, path, parent, _array_index(token, path))
    raise NotContainer(
        "Cannot address %r in a %s value (at %s)" % (token.text, kind, _location(path)), path)


class MutableReference(object):
    """A resolved location in a live document.

    Only valid until the document is next modified, do not keep it
    around. Writing methods return the (possibly new) document root.
    """

    def __init__(self, root, path):
        self.root = root
        self.path = path

    def get(self):
        "Return the referenced value, or Missing."
        raise NotImplementedError

    def set(self, value):
        raise NotImplementedError

    def insert(self, value):
        return self.set(value)

    def replace(self, value):
        return self.set(value)

    def delete(self):
        "Remove the referenced value and return it."
        raise NotImplementedError


class RootRef(MutableReference):

    def get(self):
        return self.root

    def set(self, value):
        self.root = value
        return value

    def delete(self):
        raise CannotDeleteRoot(self.path)


class ArraySlotRef(MutableReference):

    def __init__(self, root, path, parent, index):
        super(ArraySlotRef, self).__init__(root, path)
        self.parent = parent
        self.index = index

    def get(self):
        if self.index < len(self.parent):
            return self.parent[self.index]
        return Missing

    def set(self, value):
        if self.index >= len(self.parent):
            raise IndexOutOfRange(self.index, len(self.parent), self.path)
        self.parent[self.index] = value
        return self.root

    def insert(self, value):
        if self.index > len(self.parent):
            raise IndexOutOfRange(self.index, len(self.parent), self.path)
        self.parent.insert(self.index, value)
        return self.root

    def delete(self):
        if self.index >= len(self.parent):
            raise IndexOutOfRange(self.index, len(self.parent), self.path)
        return self.parent.pop(self.index)


class ArrayEndRef(MutableReference):

    def __init__(self, root, path, parent):
        super(ArrayEndRef, self).__init__(root, path)
        self.parent = parent

    def get(self):
        return Missing

    def set(self, value):
        self.parent.append(value)
        return self.root

    def replace(self, value):
        raise InvalidIndex(
            "Cannot replace nonexistent element '-' (at %s)" % _location(self.path),
            self.path)

    def delete(self):
        # Removes the last element, an empty array has nothing to delete
        if not self.parent:
            raise IndexOutOfRange("-", 0, self.path)
        return self.parent.pop()


class ObjectEntryRef(MutableReference):

    def __init__(self, root, path, parent, key):
        super(ObjectEntryRef, self).__init__(root, path)
        self.parent = parent
        self.key = key

    def get(self):
        return self.parent.get(self.key, Missing)

    def set(self, value):
        self.parent[self.key] = value
        return self.root

    def replace(self, value):
        if self.key not in self.parent:
            raise KeyNotExist(self.key, self.path)
        return self.set(value)

    def delete(self):
        if self.key not in self.parent:
            raise KeyNotExist(self.key, self.path)
        return self.parent.pop(self.key)
