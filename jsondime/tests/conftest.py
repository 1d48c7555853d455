# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging
import os
import json
import io

from jsonschema import Draft4Validator as Validator
from pytest import fixture, skip


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture
def isolated_config(tmpdir, monkeypatch):
    """Run with an empty working directory and no jupyter config files."""
    monkeypatch.setattr('jsondime.config.jupyter_config_path',
                        lambda: [str(tmpdir.join('config'))])
    with tmpdir.as_cwd():
        yield tmpdir


def _load_schema(name):
    schema_path = os.path.join(schema_dir, name)
    with io.open(schema_path, encoding="utf8") as f:
        schema_json = json.load(f)
    return schema_json


@fixture
def json_schema_diff(request):
    return _load_schema('diff_format.schema.json')


@fixture
def diff_validator(request, json_schema_diff):
    return Validator(json_schema_diff)


@fixture
def json_schema_patch(request):
    return _load_schema('patch_format.schema.json')


@fixture
def patch_validator(request, json_schema_patch):
    return Validator(json_schema_patch)


def _json_pair_names():
    names = []
    for fn in sorted(os.listdir(os.path.join(testspath(), "files"))):
        if fn.endswith("--1.json"):
            base = fn[:-len("--1.json")]
            if os.path.exists(os.path.join(testspath(), "files", base + "--2.json")):
                names.append(base)
    return names


@fixture(params=_json_pair_names())
def json_pair(request, filespath):
    """Pairs of json documents from the test files directory."""
    docs = []
    for suffix in ("--1.json", "--2.json"):
        with io.open(pjoin(filespath, request.param + suffix), encoding="utf8") as f:
            docs.append(json.load(f))
    return tuple(docs)
