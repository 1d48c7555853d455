# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import logging
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .diffing.config import ArrayPolicy
from .log import init_logging, set_jsondime_log_level


class ConfigBackedParser(argparse.ArgumentParser):

    def parse_known_args(self, args=None, namespace=None):
        entrypoint = self.prog.split(' ')[0]
        try:
            defs = get_defaults_for_argparse(entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_jsondime_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_jsondime_log_level(level, True)


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        from .prettyprint import pretty_print_value, PrettyPrintConfig

        header = entrypoint_configurables[parser.prog].__name__
        config = build_config(parser.prog, True)
        pretty_print_value(
            {header: config},
            config=PrettyPrintConfig(out=sys.stderr)
        )
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all jsondime commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_diff_args(parser):
    """Adds a set of arguments for commands that perform diffs.
    """
    parser.add_argument(
        '--array-policy',
        default=ArrayPolicy.LCS,
        choices=ArrayPolicy.ALL,
        help="how to diff arrays: align elements on their longest common "
             "subsequence (lcs), or replace unequal arrays as a whole (simple).")


filename_help = {
    "base":   "The base json filename.",
    "remote": "The remote modified json filename.",
    "patch":  "The patch filename, a json patch (RFC 6902) document.",
    }


def add_filename_args(parser, names):
    """Add the base, remote and patch positional arguments.

    Helps getting consistent doc strings.
    """
    for name in names:
        parser.add_argument(name, help=filename_help[name])


def add_prettyprint_args(parser):
    """Adds optional arguments for controlling pretty print behavior.
    """
    parser.add_argument(
        '--no-color',
        dest='use_color',
        action="store_false",
        default=True,
        help=("prevent use of ANSI color code escapes for text output")
    )


def prettyprint_config_from_args(arguments, **kwargs):
    from .prettyprint import PrettyPrintConfig
    return PrettyPrintConfig(
        use_color=getattr(arguments, 'use_color', True),
        **kwargs
    )


def diff_config_from_args(arguments):
    from .diffing.config import DiffConfig
    return DiffConfig(
        array_policy=getattr(arguments, 'array_policy', ArrayPolicy.LCS))
