# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .config import DiffConfig, ArrayPolicy
from .generic import diff, diff_simple
from .lcs import lcs

__all__ = ["diff", "diff_simple", "lcs", "DiffConfig", "ArrayPolicy"]
