# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

from .args import (
    add_generic_args, add_diff_args, add_prettyprint_args, add_filename_args,
    ConfigBackedParser, prettyprint_config_from_args, diff_config_from_args,
    )
from .diffing import diff
from .log import debug
from .patching import diff_to_patch
from .prettyprint import pretty_print_json_diff, pretty_print_diff_header
from .utils import EXPLICIT_MISSING_FILE, read_json, format_json, setup_std_streams


_description = "Compute the difference between two json documents."


def main_diff(args):
    """Main handler of diff CLI"""
    base = args.base
    remote = args.remote
    output = getattr(args, 'out', None)

    # Check that if args are filenames they either exist, or are
    # explicitly marked as missing (added/removed):
    for fn in (base, remote):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1
    # Both files cannot be missing
    if base == EXPLICIT_MISSING_FILE and remote == EXPLICIT_MISSING_FILE:
        print("Cannot diff %s against %s" % (base, remote))
        return 1

    try:
        a = read_json(base, on_null='empty')
        b = read_json(remote, on_null='empty')
    except ValueError as e:
        print("Invalid json input: {}".format(e))
        return 1
    except OSError as e:
        print("Cannot read input: {}".format(e))
        return 1

    d = diff(a, b, config=diff_config_from_args(args))
    debug("Diff of %s and %s has %d entries", base, remote, len(d))

    if output:
        # Write the equivalent patch document:
        with io.open(output, "w", encoding="utf8") as df:
            df.write(diff_to_patch(d).to_string(indent=2))
            df.write("\n")
    else:
        # This printer is to keep the unit tests passing,
        # some tests capture output with capsys which doesn't
        # pick up on sys.stdout.write()
        class Printer:
            def write(self, text):
                print(text, end="")
        if args.json:
            print(format_json(d.to_list(), indent=2))
        elif d:
            config = prettyprint_config_from_args(args, out=Printer())
            pretty_print_diff_header(base, remote, config)
            pretty_print_json_diff(a, d, config)

    return 0


def _build_arg_parser(prog='jsdiff'):
    """Creates an argument parser for the jsdiff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["base", "remote"])

    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the diff is written to this file as a json "
             "patch document. Otherwise it is printed to the terminal.")
    parser.add_argument(
        '--json',
        action="store_true",
        default=False,
        help="print the diff entries as json instead of the annotated document.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
