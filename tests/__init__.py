# __init__.py -- The tests for git2ipfs
# Copyright (C) 2026 The git2ipfs authors
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# git2ipfs is dual-licensed under the Apache License, Version 2.0 and the GNU
# General Public License as published by the Free Software Foundation; version 2.0
# or (at your option) any later version. You can redistribute it and/or
# modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Tests for git2ipfs."""

import os
import unittest
from unittest import TestCase as _TestCase


class TestCase(_TestCase):
    """Test case that keeps the user's git and IPFS setup out of the way."""

    def setUp(self) -> None:
        super().setUp()
        self._old_environ = {
            name: os.environ.get(name) for name in ("HOME", "IPFS_PATH", "GIT_TRACE")
        }
        os.environ["HOME"] = "/nonexistent"
        os.environ.pop("IPFS_PATH", None)
        os.environ.pop("GIT_TRACE", None)

    def tearDown(self) -> None:
        for name, value in self._old_environ.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
        super().tearDown()


def self_test_suite() -> unittest.TestSuite:
    names = [
        "cid",
        "cli",
        "config",
        "ipfs",
        "links",
        "log_utils",
        "objects",
        "porcelain",
        "push",
        "source",
        "varint",
        "visited",
    ]
    module_names = ["tests.test_" + name for name in names]
    loader = unittest.TestLoader()
    return loader.loadTestsFromNames(module_names)


def test_suite() -> unittest.TestSuite:
    result = unittest.TestSuite()
    result.addTests(self_test_suite())
    return result
