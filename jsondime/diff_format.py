# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import defaultdict

from .log import DiffFormatError
from .pointer import (
    Path, Index, Key, parse_pointer, render_pointer, classify_token, MalformedPointer,
    )
from .utils import json_equal


class DiffOp:
    "Collection of valid values for the op field in diff entries."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


class Change(object):
    """The edit recorded at one path of a diff.

    One of Add, Remove or Replace.
    """
    __slots__ = ()
    op = None

    def to_dict(self):
        raise NotImplementedError

    def __ne__(self, other):
        return not self == other


class Add(Change):
    "A value present only in the right document."
    __slots__ = ("value",)
    op = DiffOp.ADD

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Add) and json_equal(self.value, other.value)

    __hash__ = None

    def __repr__(self):
        return "Add(%r)" % (self.value,)

    def to_dict(self):
        return {"op": self.op, "value": self.value}


class Remove(Change):
    "A value present only in the left document."
    __slots__ = ("value",)
    op = DiffOp.REMOVE

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Remove) and json_equal(self.value, other.value)

    __hash__ = None

    def __repr__(self):
        return "Remove(%r)" % (self.value,)

    def to_dict(self):
        return {"op": self.op, "value": self.value}


class Replace(Change):
    "A value that differs between the documents."
    __slots__ = ("old", "new")
    op = DiffOp.REPLACE

    def __init__(self, old, new):
        self.old = old
        self.new = new

    def __eq__(self, other):
        return (isinstance(other, Replace) and
                json_equal(self.old, other.old) and
                json_equal(self.new, other.new))

    __hash__ = None

    def __repr__(self):
        return "Replace(%r, %r)" % (self.old, self.new)

    def to_dict(self):
        return {"op": self.op, "old": self.old, "new": self.new}


class DiffEntry(tuple):
    """A (path, change) pair of a diff result."""
    __slots__ = ()

    def __new__(cls, path, change):
        if not isinstance(change, Change):
            raise DiffFormatError("Diff entry change must be a Change, got %r" % (change,))
        return super(DiffEntry, cls).__new__(cls, (Path(path), change))

    @property
    def path(self):
        return self[0]

    @property
    def change(self):
        return self[1]

    def __getnewargs__(self):
        return (self.path, self.change)

    def __repr__(self):
        return "DiffEntry(%r, %r)" % (self.path, self.change)

    def to_dict(self):
        d = {"path": render_pointer(self.path)}
        d.update(self.change.to_dict())
        return d


def op_add(path, value):
    "Create a diff entry recording value added at path."
    return DiffEntry(_as_path(path), Add(value))

def op_remove(path, value):
    "Create a diff entry recording value removed at path."
    return DiffEntry(_as_path(path), Remove(value))

def op_replace(path, old, new):
    "Create a diff entry recording old replaced by new at path."
    return DiffEntry(_as_path(path), Replace(old, new))


def _as_path(path):
    if isinstance(path, str):
        return parse_pointer(path)
    return Path(path)


class DiffResult(object):
    """The result of diffing two documents.

    Built once from the emitted entries, read-only afterwards.
    Provides lookup of the change at a path, of the object keys
    added under a parent path, and of the changes made inside
    an index range of an array.

    Lookups match paths by their pointer text, so the pointer "/0"
    finds a change recorded at Key("0") as well as at Index(0).
    """

    def __init__(self, entries=()):
        self._entries = tuple(entries)
        self._path2changes = defaultdict(list)
        self._added_keys = defaultdict(list)
        self._array_changes = defaultdict(list)
        for e in self._entries:
            if not isinstance(e, DiffEntry):
                raise DiffFormatError("Not a diff entry: %r" % (e,))
            key = _lookup_key(e.path)
            self._path2changes[key].append(e.change)
            last = e.path.last
            # Only object keys go into this index,
            # array additions are addressed positionally
            if isinstance(e.change, Add) and isinstance(last, Key):
                self._added_keys[key[:-1]].append(last.name)
            if last is not None and isinstance(classify_token(last.text), Index):
                self._array_changes[key[:-1]].append(e)
        # Freeze, lookups of missing paths must not insert
        self._path2changes = dict(self._path2changes)
        self._added_keys = dict(self._added_keys)
        self._array_changes = dict(self._array_changes)

    @property
    def entries(self):
        return self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __eq__(self, other):
        if isinstance(other, DiffResult):
            other = other._entries
        try:
            return _comparable(self._entries) == _comparable(other)
        except (TypeError, AttributeError):
            return False

    __hash__ = None

    def __repr__(self):
        return "DiffResult(%r)" % (list(self._entries),)

    def get_change(self, path):
        "Return the change recorded at path, or None."
        changes = self._path2changes.get(_lookup_key(_as_path(path)))
        if not changes:
            return None
        return changes[0]

    def get_changes(self, path):
        """Return all changes recorded at path, in emission order.

        More than one change is recorded at an array index
        when consecutive elements were removed there.
        """
        return list(self._path2changes.get(_lookup_key(_as_path(path)), ()))

    def get_added_keys(self, parent_path):
        "Return the list of object keys added directly under parent_path, or None."
        keys = self._added_keys.get(_lookup_key(_as_path(parent_path)))
        if keys is None:
            return None
        return list(keys)

    def get_changes_in_range(self, array_path, start, stop):
        "Return entries at array_path/k for start <= k < stop, in emission order."
        return [e for e in self._array_changes.get(_lookup_key(_as_path(array_path)), ())
                if start <= int(e.path.last.text) < stop]

    def paths(self):
        return sorted(set(e.path for e in self._entries))

    def to_list(self):
        "Return json serializable records, sorted by path."
        return [e.to_dict() for e in sorted_entries(self._entries)]

    @classmethod
    def from_list(cls, records):
        """Build a DiffResult from records as produced by to_list.

        A pointer does not tell whether a digit token names an array
        element or an object key. Digit tokens are read as indices
        below parents that the records show to be arrays, i.e. parents
        with several changes recorded at one child path (a run of
        removals), and as keys everywhere else.
        """
        entries = [diff_entry_from_dict(r) for r in records]
        counts = defaultdict(int)
        for e in entries:
            counts[_lookup_key(e.path)] += 1
        arrays = set(key[:-1] for key, n in counts.items() if n > 1)
        return cls(DiffEntry(_reshape(e.path, arrays), e.change) for e in entries)


def _lookup_key(path):
    return tuple(t.text for t in path)


def _reshape(path, arrays):
    texts = _lookup_key(path)
    tokens = []
    for depth, t in enumerate(path):
        if isinstance(t, Index) and texts[:depth] not in arrays:
            t = Key(t.text)
        tokens.append(t)
    return Path(tokens)


def _comparable(entries):
    # Sort on pointer text only, keeping emission order for equal paths
    keyed = [(_lookup_key(e.path), e.change) for e in entries]
    return sorted(keyed, key=lambda item: item[0])


def sorted_entries(entries):
    "Sort entries by path, keeping emission order for equal paths."
    return sorted(entries, key=lambda e: e.path)


def diff_entry_from_dict(record):
    if not isinstance(record, dict):
        raise DiffFormatError("Diff record must be an object, got %r" % (record,))
    try:
        path = parse_pointer(record["path"])
        op = record["op"]
        if op == DiffOp.ADD:
            change = Add(record["value"])
        elif op == DiffOp.REMOVE:
            change = Remove(record["value"])
        elif op == DiffOp.REPLACE:
            change = Replace(record["old"], record["new"])
        else:
            raise DiffFormatError("Unknown diff op '{}'.".format(op))
    except KeyError as e:
        raise DiffFormatError("Diff record %r is missing field %s" % (record, e))
    except MalformedPointer as e:
        raise DiffFormatError(str(e))
    return DiffEntry(path, change)


def validate_diff(diff):
    """Check whether a diff (list of diff entries) is well formed.

    Raises a DiffFormatError if not well formed.
    """
    if isinstance(diff, DiffResult):
        diff = diff.entries
    if not isinstance(diff, (list, tuple)):
        raise DiffFormatError("Diff must be a list of entries.")
    for e in diff:
        if not isinstance(e, DiffEntry):
            raise DiffFormatError("Diff entry '{}' is not a diff type.".format(e))
        if isinstance(e.change, Add) and not e.path:
            raise DiffFormatError("Cannot add the document root.")
        if isinstance(e.change, Remove) and not e.path:
            raise DiffFormatError("Cannot remove the document root.")


def is_valid_diff(diff):
    """Checks whether a diff (list of diff entries) is well formed.

    Returns a boolean indicating the well-formedness of the diff.
    """
    try:
        validate_diff(diff)
    except DiffFormatError:
        return False
    return True
