#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

JSONDIME_PATH = HERE / "jsondime"


def get_version(path):
    "Read __version__ from a module without importing its package."
    with open(path, encoding='utf-8') as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M)
    return match.group(1)


VERSION = get_version(JSONDIME_PATH / '_version.py')


if __name__ == '__main__':
    setup(
      name='jsondime',
      version=VERSION,
      description='Diff and patch json documents',
      long_description=(
          'Structural diffing of json documents with LCS based array alignment, '
          'json pointer (RFC 6901) addressing and json patch (RFC 6902) application.'
      ),
      license='BSD',
      python_requires='>=3.6',
      packages=find_packages(),
      package_data={
          'jsondime': ['*.schema.json'],
          'jsondime.tests': ['files/*.json'],
      },
      install_requires=[
          'colorama',
          'jupyter_core',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'pytest>=6.0',
              'jsonschema',
          ],
      },
      entry_points={
          'console_scripts': [
              'jsondime = jsondime.__main__:main_dispatch',
              'jsdiff = jsondime.jsdiffapp:main',
              'jspatch = jsondime.jspatchapp:main',
          ],
      },
      classifiers=[
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
      ],
    )
