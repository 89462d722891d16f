#!/usr/bin/python3
# Setup file for git2ipfs
# Copyright (C) 2026 The git2ipfs authors
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later

from setuptools import setup

tests_require = ["pytest"]


setup(
    name="git2ipfs",
    version="0.1.0",
    description="Push the objects reachable from a git reference to IPFS",
    license="Apache-2.0 OR GPL-2.0-or-later",
    packages=["git2ipfs"],
    package_data={"": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=["dulwich>=0.22", "urllib3>=2.0"],
    extras_require={"test": tests_require},
    entry_points={"console_scripts": ["git2ipfs=git2ipfs.cli:_main"]},
)
