# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import sys

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


class JsonKind:
    "Collection of the kinds a json value can have."
    NULL = "null"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value):
    """Return the JsonKind of a json-like value.

    Raises TypeError for python objects that have no json counterpart.
    """
    # bool must be tested before int, as bool is an int subclass
    if value is None:
        return JsonKind.NULL
    elif isinstance(value, bool):
        return JsonKind.BOOL
    elif isinstance(value, (int, float)):
        return JsonKind.NUMBER
    elif isinstance(value, str):
        return JsonKind.STRING
    elif isinstance(value, list):
        return JsonKind.ARRAY
    elif isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError("Not a json value: %r (type %s)" % (value, type(value).__name__))


def json_equal(a, b):
    """Deep equality of two json-like values.

    Unlike ==, a boolean never equals a number, i.e.
    json_equal(True, 1) is False. Numbers compare by value,
    NaN equals NaN, and object key order is not significant.
    """
    ka = json_kind(a)
    if ka != json_kind(b):
        return False
    if ka == JsonKind.ARRAY:
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    elif ka == JsonKind.OBJECT:
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not json_equal(value, b[key]):
                return False
        return True
    elif ka == JsonKind.NUMBER and a != a:
        return b != b
    return a == b


def reject_constant(name):
    "Refuse the non-standard NaN and Infinity literals when parsing json."
    raise ValueError("%s is not a valid json value" % (name,))


def format_json(value, indent=None):
    "Serialize value as json text, used in messages and output."
    return json.dumps(value, indent=indent, ensure_ascii=False, sort_keys=False)


def read_json(f, on_null='empty'):
    """Read and return a json document from filename

    Parameters:
        f:  The filename to read from or null filename
            ("/dev/null" on *nix, "nul" on Windows).
            Alternatively a file-like object can be passed.
        on_null: What to return when filename null
            "empty": return empty dict
            "null": return None
    """
    if f == EXPLICIT_MISSING_FILE:
        if on_null == 'empty':
            return {}
        elif on_null == 'null':
            return None
        else:
            raise ValueError(
                'Not valid value for `on_null`: %r. Valid values '
                'are "empty" or "null"' % (on_null,))
    if isinstance(f, str):
        with io.open(f, encoding='utf-8') as fo:
            return json.load(fo, parse_constant=reject_constant)
    return json.load(f, parse_constant=reject_constant)


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        raw_stream = getattr(sys, '__%s__' % name)
        if stream is not raw_stream:
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        # if error-handler is strict, switch to replace
        if errors == 'strict' or errors.startswith('surrogate'):
            bin_stream = stream.buffer
            new_stream = codecs.getwriter(enc)(bin_stream, errors='backslashreplace')
            setattr(sys, name, new_stream)


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """

    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
