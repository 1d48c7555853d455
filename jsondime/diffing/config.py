# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..utils import json_equal


class ArrayPolicy:
    "Collection of valid values for the array_policy of DiffConfig."
    LCS = "lcs"
    SIMPLE = "simple"

    ALL = (LCS, SIMPLE)


class DiffConfig:
    """Set of options to pass around while diffing"""

    def __init__(self, *, array_policy=ArrayPolicy.LCS, predicate=None):
        if array_policy not in ArrayPolicy.ALL:
            raise ValueError("Unknown array policy %r, valid values are %r." % (
                array_policy, ArrayPolicy.ALL))
        if predicate is None:
            predicate = json_equal

        self.array_policy = array_policy
        self.predicate = predicate
