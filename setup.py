#!/usr/bin/env python3
"""
Setup script for towboat.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    init_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        init_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="towboat",
        version=find_version("towboat/__version__.py"),
        description="A stow-like tool for cross-platform dotfiles with build tags",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.11",
        install_requires=[
            "click>=8.1",
            "rich>=13.0",
            "jsonschema>=4.0",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "pytest-mock>=3.10",
            ],
        },
        entry_points={
            "console_scripts": [
                "towboat=towboat.cli.main:main",
            ],
        },
    )
