# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diff_format import DiffResult, DiffEntry
from .diffing import diff, diff_simple, DiffConfig, ArrayPolicy
from .log import JsonDimeError
from .patching import apply_patch, diff_to_patch, PatchDocument
from .pointer import Path, parse_pointer, render_pointer, resolve, resolve_mut


__all__ = [
    "__version__",
    "diff", "diff_simple", "DiffConfig", "ArrayPolicy",
    "DiffResult", "DiffEntry",
    "apply_patch", "diff_to_patch", "PatchDocument",
    "Path", "parse_pointer", "render_pointer", "resolve", "resolve_mut",
    "JsonDimeError",
    ]
