# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import datetime
import os
import sys

import colorama

from .diff_format import Add, Remove, Replace
from .pointer import Path
from .utils import format_json, json_kind, JsonKind


ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = ' ',
        REMOVE = '{color}-'.format(color=colorama.Fore.RED),
        ADD    = '{color}+'.format(color=colorama.Fore.GREEN),
        INFO   = '{color}'.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = ' ',
        REMOVE = '-',
        ADD    = '+',
        INFO   = '',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(
            self,
            out=sys.stdout,
            use_color=True,
            indent=4,
            ):
        self.out = out
        self.use_color = use_color
        self.indent = indent

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


def file_timestamp(filename):
    "Return modification time for filename as a string."
    if os.path.exists(filename):
        t = os.path.getmtime(filename)
        dt = datetime.datetime.fromtimestamp(t)
        return dt.isoformat(str(" "))
    else:
        return "(no timestamp)"


def _write_line(marker, depth, text, config, key=None):
    """Write one output line.

    marker is one of config.KEEP, config.REMOVE or config.ADD,
    added and removed lines are reset after the text.
    """
    if key is not None:
        text = "%s: %s" % (format_json(key), text)
    reset = config.RESET if marker != config.KEEP else ""
    config.out.write("%s%s%s%s\n" % (
        marker, " " * (config.indent * depth), text, reset))


def _print_value(value, marker, depth, config, key=None):
    "Print a value in full, every line with the same marker."
    kind = json_kind(value)
    if kind == JsonKind.OBJECT:
        _write_line(marker, depth, "{", config, key)
        for k in sorted(value):
            _print_value(value[k], marker, depth + 1, config, k)
        _write_line(marker, depth, "}", config)
    elif kind == JsonKind.ARRAY:
        _write_line(marker, depth, "[", config, key)
        for v in value:
            _print_value(v, marker, depth + 1, config)
        _write_line(marker, depth, "]", config)
    else:
        _write_line(marker, depth, format_json(value), config, key)


def _print_change(change, depth, config, key=None):
    if isinstance(change, Add):
        _print_value(change.value, config.ADD, depth, config, key)
    elif isinstance(change, Remove):
        _print_value(change.value, config.REMOVE, depth, config, key)
    elif isinstance(change, Replace):
        _print_value(change.old, config.REMOVE, depth, config, key)
        _print_value(change.new, config.ADD, depth, config, key)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a value as indented json with all lines prefixed."""
    text = format_json(value, indent=config.indent)
    for line in text.splitlines():
        config.out.write("%s%s\n" % (prefix, line))


def _print_diff_at(value, path, result, depth, config, key=None):
    """Print value, the left document at path, with the changes of result."""
    changes = result.get_changes(path)
    if changes:
        for change in changes:
            _print_change(change, depth, config, key)
    else:
        _print_kept_at(value, path, result, depth, config, key)


def _print_kept_at(value, path, result, depth, config, key=None):
    "Print value, which is kept at path, recursing into its changes."
    kind = json_kind(value)
    if kind == JsonKind.OBJECT:
        _write_line(config.KEEP, depth, "{", config, key)
        # Added keys go first, they have no position in the left object
        for k in result.get_added_keys(path) or ():
            _print_change(result.get_change(path.child(k)), depth + 1, config, k)
        for k in sorted(value):
            _print_diff_at(value[k], path.child(k), result, depth + 1, config, k)
        _write_line(config.KEEP, depth, "}", config)
    elif kind == JsonKind.ARRAY:
        _write_line(config.KEEP, depth, "[", config, key)
        _print_list_diff(value, path, result, depth + 1, config)
        _write_line(config.KEEP, depth, "]", config)
    else:
        _write_line(config.KEEP, depth, format_json(value), config, key)


def _print_list_diff(value, path, result, depth, config):
    # i = index into the left list, k = index into the edited list,
    # removals are all recorded at the edited index they happen at
    i, k = 0, 0
    while True:
        child = path.child(k)
        changes = result.get_changes(child)
        if not changes and i >= len(value):
            break
        advance = False
        for change in changes:
            _print_change(change, depth, config)
            if not isinstance(change, Add):
                i += 1
            if not isinstance(change, Remove):
                advance = True
        if advance:
            k += 1
        elif i < len(value):
            # After any removals, left item i is kept at edited index k
            _print_kept_at(value[i], child, result, depth, config)
            i += 1
            k += 1
        else:
            break


def pretty_print_json_diff(a, result, config=DefaultConfig):
    """Pretty-print a diff as the left document with the changes marked.

    Parameters
    ----------

    a: json-like value
        The left document that was diffed
    result: DiffResult
        The diff of a against the right document
    config: PrettyPrintConfig
        Config object determining how and where to print
    """
    _print_diff_at(a, Path(), result, 0, config)


json_diff_header = """\
{info}--- {afn}{atime}{reset}
{info}+++ {bfn}{btime}{reset}
"""

def pretty_print_diff_header(afn, bfn, config=DefaultConfig):
    atime = "  " + file_timestamp(afn)
    btime = "  " + file_timestamp(bfn)
    config.out.write(json_diff_header.format(
        afn=afn, bfn=bfn, atime=atime, btime=btime,
        info=config.INFO, reset=config.RESET))
