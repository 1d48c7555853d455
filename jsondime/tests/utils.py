# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from jsondime import diff, apply_patch, diff_to_patch
from jsondime.diff_format import is_valid_diff
from jsondime.diffing import DiffConfig, ArrayPolicy
from jsondime.utils import json_equal


def check_diff_and_patch(a, b, array_policy=ArrayPolicy.LCS):
    "Check that apply_patch(a, diff_to_patch(diff(a,b))) reproduces b."
    a_copy = copy.deepcopy(a)
    d = diff(a, b, config=DiffConfig(array_policy=array_policy))
    assert is_valid_diff(d)
    assert json_equal(apply_patch(a, diff_to_patch(d)), b)
    # Neither diffing nor patching may modify the input
    assert json_equal(a, a_copy)


def check_symmetric_diff_and_patch(a, b):
    "Check that diff and patch reproduce b from a and vice versa, for all array policies."
    for policy in ArrayPolicy.ALL:
        check_diff_and_patch(a, b, policy)
        check_diff_and_patch(b, a, policy)
