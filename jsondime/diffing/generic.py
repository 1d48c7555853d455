# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..diff_format import DiffResult, op_add, op_remove, op_replace, validate_diff
from ..log import debug
from ..pointer import Path, parse_pointer
from ..utils import json_kind, json_equal, JsonKind

from .config import DiffConfig, ArrayPolicy
from .lcs import lcs

__all__ = ["diff", "diff_simple"]


def diff(a, b, path="", config=None):
    """Compute the diff of two json-like documents.

    Returns a DiffResult with the changes turning a into b,
    addressed by paths into b's layout (see diff_lists_lcs).
    """
    if config is None:
        config = DiffConfig()
    if not isinstance(path, Path):
        path = parse_pointer(path)

    di = []
    diff_values(a, b, di, path=path, config=config)

    # We can turn this off for performance after the library has been well tested:
    validate_diff(di)

    return DiffResult(di)


def diff_simple(a, b, path=""):
    "Compute the diff of a and b, replacing unequal arrays as a whole."
    return diff(a, b, path=path, config=DiffConfig(array_policy=ArrayPolicy.SIMPLE))


def diff_values(a, b, di, path=Path(), config=None):
    """Append the entries of the diff of a and b at path to di."""
    if config is None:
        config = DiffConfig()

    ka = json_kind(a)
    kb = json_kind(b)
    if ka == kb == JsonKind.OBJECT:
        diff_dicts(a, b, di, path=path, config=config)
    elif ka == kb == JsonKind.ARRAY:
        if config.array_policy == ArrayPolicy.LCS:
            diff_lists_lcs(a, b, di, path=path, config=config)
        else:
            diff_lists_simple(a, b, di, path=path, config=config)
    elif not json_equal(a, b):
        # Covers different scalar values and any change of kind
        di.append(op_replace(path, a, b))


def diff_lists_simple(a, b, di, path=Path(), config=None):
    "Replace the whole list if a and b differ at all."
    if not json_equal(a, b):
        di.append(op_replace(path, a, b))


def diff_lists_lcs(a, b, di, path=Path(), config=None):
    """Diff two lists using their longest common subsequence as anchors.

    Indices in the emitted paths count positions in the list being
    edited: additions and paired items advance the index, removals
    do not, as the removed item disappears from the edited list.
    Between two anchors, items are first paired up positionally and
    diffed recursively, the surplus on one side is then removed or
    added.
    """
    if config is None:
        config = DiffConfig()

    pairs = lcs(a, b, config.predicate)
    debug("Aligned lists of length %d and %d at %s with %d anchors",
          len(a), len(b), path, len(pairs))

    N, M = len(a), len(b)
    # i, j = how many items we have consumed from a and b,
    # k = index into the edited list
    i, j, k = 0, 0, 0
    for ai, bj in pairs + [(N, M)]:
        while i < ai and j < bj:
            diff_values(a[i], b[j], di, path=path.child(k), config=config)
            i += 1
            j += 1
            k += 1
        while i < ai:
            di.append(op_remove(path.child(k), a[i]))
            i += 1
        while j < bj:
            di.append(op_add(path.child(k), b[j]))
            j += 1
            k += 1
        if ai < N:
            # Consume the anchor itself
            i += 1
            j += 1
            k += 1

    # Sanity check
    assert i == N, "Sanity check failed: Did not process all entries in a"
    assert j == M, "Sanity check failed: Did not process all entries in b"


def diff_dicts(a, b, di, path=Path(), config=None):
    """Compute diff of two dicts with configurable behaviour.

    Keys only in a are removed, keys only in b are added and
    values of keys in both are diffed recursively.
    """
    if config is None:
        config = DiffConfig()

    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_dicts need to be dicts, got %r and %r' % (a, b))
    akeys = set(a.keys())
    bkeys = set(b.keys())

    # Sorting keys in loops to get a deterministic diff result
    for key in sorted(akeys - bkeys):
        di.append(op_remove(path.child(key), a[key]))

    for key in sorted(akeys & bkeys):
        diff_values(a[key], b[key], di, path=path.child(key), config=config)

    for key in sorted(bkeys - akeys):
        di.append(op_add(path.child(key), b[key]))
