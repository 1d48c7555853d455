# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Application of json patch (RFC 6902) documents.

A patch is a sequence of operations applied strictly in order, each
one to the result of the previous. Every step works on a fresh deep
copy of the current document, so a failing operation never leaves
a half-modified document behind and the input is never mutated.
"""

import copy
import json

from .diff_format import Add, Remove, Replace, DiffResult
from .log import JsonDimeError, debug
from .pointer import (
    Missing, parse_pointer, render_pointer, resolve, resolve_mut,
    )
from .utils import json_equal, format_json, reject_constant


__all__ = [
    "apply_patch", "diff_to_patch", "PatchDocument", "PatchOp",
    "AddOperation", "RemoveOperation", "ReplaceOperation",
    "MoveOperation", "CopyOperation", "TestOperation",
    "PatchError", "InvalidPatchDocument", "UnsupportedOperation",
    "MissingField", "InvalidMove", "TestFailed",
    ]


class PatchError(JsonDimeError):
    """Base class of errors in patch documents."""
    pass


class InvalidPatchDocument(PatchError):
    pass


class UnsupportedOperation(PatchError):
    def __init__(self, name):
        super(UnsupportedOperation, self).__init__(
            "Unsupported patch operation %r" % (name,))
        self.name = name


class MissingField(PatchError):
    def __init__(self, field, op=None):
        if op is None:
            msg = "Patch operation is missing field %r" % (field,)
        else:
            msg = "Patch operation %r is missing field %r" % (op, field)
        super(MissingField, self).__init__(msg)
        self.field = field
        self.op = op


class InvalidMove(PatchError):
    pass


class TestFailed(JsonDimeError):
    """A test operation found a value different from the expected one.

    This is an expected outcome of applying a patch, not a sign of
    a malformed document.
    """
    # Not a test case, keep pytest from collecting it
    __test__ = False

    def __init__(self, path, expected, actual):
        super(TestFailed, self).__init__(
            "Test failed at %s: expected %s, found %s" % (
                render_pointer(path) or '""',
                format_json(expected), format_json(actual)))
        self.path = path
        self.expected = expected
        self.actual = actual


class PatchOp:
    "Collection of valid values for the op field in patch operations."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


class Operation(object):
    """Base class of patch operations.

    Subclasses implement apply(doc), which may modify doc in place
    and returns the resulting document root.
    """
    op = None
    # Fields of the serialized form, in the order of constructor arguments
    fields = ("path",)

    def __init__(self, path):
        self.path = parse_pointer(path)

    def apply(self, doc):
        raise NotImplementedError

    def to_dict(self):
        return {"op": self.op, "path": render_pointer(self.path)}

    def __eq__(self, other):
        return (type(other) is type(self) and
                json_equal(self.to_dict(), other.to_dict()))

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, format_json(self.to_dict()))


class AddOperation(Operation):
    op = PatchOp.ADD
    fields = ("path", "value")

    def __init__(self, path, value):
        super(AddOperation, self).__init__(path)
        self.value = value

    def apply(self, doc):
        return resolve_mut(doc, self.path).insert(copy.deepcopy(self.value))

    def to_dict(self):
        d = super(AddOperation, self).to_dict()
        d["value"] = self.value
        return d


class RemoveOperation(Operation):
    op = PatchOp.REMOVE

    def apply(self, doc):
        ref = resolve_mut(doc, self.path)
        ref.delete()
        return ref.root


class ReplaceOperation(Operation):
    op = PatchOp.REPLACE
    fields = ("path", "value")

    def __init__(self, path, value):
        super(ReplaceOperation, self).__init__(path)
        self.value = value

    def apply(self, doc):
        return resolve_mut(doc, self.path).replace(copy.deepcopy(self.value))

    def to_dict(self):
        d = super(ReplaceOperation, self).to_dict()
        d["value"] = self.value
        return d


class MoveOperation(Operation):
    op = PatchOp.MOVE
    fields = ("from", "path")

    def __init__(self, from_path, path):
        super(MoveOperation, self).__init__(path)
        self.from_path = parse_pointer(from_path)

    def apply(self, doc):
        if self.from_path == self.path:
            # Nothing to do, but the source must exist
            resolve(doc, self.from_path)
            return doc
        if self.from_path.is_prefix_of(self.path):
            raise InvalidMove(
                "Cannot move %s into its own child %s" % (
                    render_pointer(self.from_path) or '""',
                    render_pointer(self.path)))
        ref = resolve_mut(doc, self.from_path)
        value = ref.delete()
        return resolve_mut(ref.root, self.path).insert(value)

    def to_dict(self):
        d = super(MoveOperation, self).to_dict()
        d["from"] = render_pointer(self.from_path)
        return d


class CopyOperation(Operation):
    op = PatchOp.COPY
    fields = ("from", "path")

    def __init__(self, from_path, path):
        super(CopyOperation, self).__init__(path)
        self.from_path = parse_pointer(from_path)

    def apply(self, doc):
        value = copy.deepcopy(resolve(doc, self.from_path))
        return resolve_mut(doc, self.path).insert(value)

    def to_dict(self):
        d = super(CopyOperation, self).to_dict()
        d["from"] = render_pointer(self.from_path)
        return d


class TestOperation(Operation):
    __test__ = False
    op = PatchOp.TEST
    fields = ("path", "value")

    def __init__(self, path, value):
        super(TestOperation, self).__init__(path)
        self.value = value

    def apply(self, doc):
        actual = resolve(doc, self.path)
        if not json_equal(actual, self.value):
            raise TestFailed(self.path, self.value, actual)
        return doc

    def to_dict(self):
        d = super(TestOperation, self).to_dict()
        d["value"] = self.value
        return d


_operation_classes = {
    cls.op: cls for cls in (
        AddOperation, RemoveOperation, ReplaceOperation,
        MoveOperation, CopyOperation, TestOperation)
    }


def operation_from_dict(record):
    """Parse a single serialized patch operation.

    Fields not used by the operation are ignored.
    """
    if not isinstance(record, dict):
        raise InvalidPatchDocument(
            "Patch operation must be an object, got %s" % (format_json(record),))
    op = record.get("op", Missing)
    if op is Missing:
        raise MissingField("op")
    if not isinstance(op, str) or op not in _operation_classes:
        raise UnsupportedOperation(op)
    cls = _operation_classes[op]
    args = []
    for field in cls.fields:
        value = record.get(field, Missing)
        if value is Missing:
            raise MissingField(field, op)
        args.append(value)
    return cls(*args)


class PatchDocument(object):
    """An ordered sequence of patch operations."""

    def __init__(self, operations=()):
        self._operations = list(operations)
        for o in self._operations:
            if not isinstance(o, Operation):
                raise TypeError("Not a patch operation: %r" % (o,))

    @classmethod
    def from_list(cls, records):
        if not isinstance(records, list):
            raise InvalidPatchDocument(
                "Patch document must be a list of operations, got %s" % (
                    type(records).__name__,))
        return cls(operation_from_dict(r) for r in records)

    @classmethod
    def from_string(cls, text):
        try:
            records = json.loads(text, parse_constant=reject_constant)
        except ValueError as e:
            raise InvalidPatchDocument("Patch document is not valid json: %s" % e)
        return cls.from_list(records)

    def to_list(self):
        return [o.to_dict() for o in self._operations]

    def to_string(self, indent=None):
        return format_json(self.to_list(), indent=indent)

    @property
    def operations(self):
        return tuple(self._operations)

    def __iter__(self):
        return iter(self._operations)

    def __len__(self):
        return len(self._operations)

    def __eq__(self, other):
        return isinstance(other, PatchDocument) and self._operations == other._operations

    __hash__ = None

    def __repr__(self):
        return "PatchDocument(%r)" % (self._operations,)

    def apply(self, document):
        """Apply all operations in order and return the resulting document.

        Errors are raised as is, annotated with the index of the failing
        operation (operation_index) and the operation itself (operation).
        """
        if not self._operations:
            return copy.deepcopy(document)
        doc = document
        for i, operation in enumerate(self._operations):
            debug("Applying patch operation %d: %r", i, operation)
            snapshot = copy.deepcopy(doc)
            try:
                doc = operation.apply(snapshot)
            except JsonDimeError as e:
                e.operation_index = i
                e.operation = operation
                raise
        return doc


def apply_patch(document, patch):
    """Apply patch to document and return the patched document.

    patch can be a PatchDocument, a list of operation records or a
    json string. The input document is not modified.
    """
    if not isinstance(patch, PatchDocument):
        if isinstance(patch, str):
            patch = PatchDocument.from_string(patch)
        else:
            patch = PatchDocument.from_list(patch)
    return patch.apply(document)


def diff_to_patch(diff):
    """Translate a diff into the equivalent patch document.

    Entries are translated in the order the diff emitted them,
    as array indices in a diff depend on the changes before them.
    """
    if isinstance(diff, DiffResult):
        diff = diff.entries
    operations = []
    for e in diff:
        if isinstance(e.change, Add):
            operations.append(AddOperation(e.path, e.change.value))
        elif isinstance(e.change, Remove):
            operations.append(RemoveOperation(e.path))
        elif isinstance(e.change, Replace):
            operations.append(ReplaceOperation(e.path, e.change.new))
        else:
            raise TypeError("Not a diff change: %r" % (e.change,))
    return PatchDocument(operations)
