# utils.py -- Test utilities for git2ipfs
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

"""Utility functions common to git2ipfs tests."""

import datetime
import hashlib
import json
import time

from dulwich.objects import Commit, Tag, Tree

from git2ipfs.cid import DAG_PB, GIT_RAW, SHA1, SHA2_256, ContentId
from git2ipfs.errors import StoreError
from git2ipfs.objects import RawObject, encode_raw
from git2ipfs.push import EMPTY_DAG_PB

# Plain files are very frequently used in tests, so let the mode be very short.
F = 0o100644  # Shorthand mode for Files.

DEFAULT_TIME = int(time.mktime(datetime.datetime(2010, 1, 1).timetuple()))

# Serialized empty UnixFS directory.
EMPTY_DAG_PB_DATA = b"\x0a\x02\x08\x01"


def make_commit(**attrs) -> Commit:
    """Make a Commit object with a default set of members.

    Args:
      attrs: dict of attributes to overwrite from the default values.
    Returns: A newly initialized Commit object.
    """
    all_attrs = {
        "author": b"Test Author <test@nodomain.com>",
        "author_time": DEFAULT_TIME,
        "author_timezone": 0,
        "committer": b"Test Committer <test@nodomain.com>",
        "commit_time": DEFAULT_TIME,
        "commit_timezone": 0,
        "message": b"Test message.\n",
        "parents": [],
        "tree": Tree().id,
    }
    all_attrs.update(attrs)
    commit = Commit()
    for name, value in all_attrs.items():
        setattr(commit, name, value)
    return commit


def make_tag(target, **attrs) -> Tag:
    """Make an annotated Tag pointing at target."""
    all_attrs = {
        "tagger": b"Test Tagger <test@nodomain.com>",
        "tag_time": DEFAULT_TIME,
        "tag_timezone": 0,
        "message": b"Test tag.\n",
        "name": b"v1.0",
        "object": (type(target), target.id),
    }
    all_attrs.update(attrs)
    tag = Tag()
    for name, value in all_attrs.items():
        setattr(tag, name, value)
    return tag


def make_tree(entries) -> Tree:
    """Make a Tree from (name, object) pairs; trees get directory mode."""
    tree = Tree()
    for name, obj in entries:
        mode = 0o040000 if isinstance(obj, Tree) else F
        tree.add(name, mode, obj.id)
    return tree


def raw_sha(type_num: int, payload: bytes) -> bytes:
    """Return the git id of a payload, however malformed it is."""
    data = encode_raw(type_num, len(payload), payload)
    return hashlib.sha1(data).hexdigest().encode("ascii")


class DictObjectSource:
    """Object source serving RawObjects from a dict, unchecked."""

    def __init__(self, objects=None) -> None:
        self.objects = dict(objects or {})
        self.fetched = []

    def add(self, type_num: int, payload: bytes) -> bytes:
        sha = raw_sha(type_num, payload)
        self.objects[sha] = RawObject(type_num, len(payload), payload)
        return sha

    def fetch_object(self, sha: bytes) -> RawObject:
        self.fetched.append(sha)
        return self.objects[sha]


class MemoryBlockStore:
    """Block store that keeps everything in memory and records its calls.

    git-raw/sha1 blocks get the CID a real node would compute. Patched
    roots get a dag-pb CID over a stand-in serialization of their links.
    """

    def __init__(self) -> None:
        self.blocks = {EMPTY_DAG_PB: EMPTY_DAG_PB_DATA}
        self.roots = {EMPTY_DAG_PB: {}}
        self.calls = []

    @property
    def put_calls(self):
        return [call for call in self.calls if call[0] == "put_block"]

    def pushed_shas(self):
        return [
            hashlib.sha1(call[1]).hexdigest().encode("ascii") for call in self.put_calls
        ]

    def _cid_for(self, data: bytes) -> str:
        return str(ContentId(1, GIT_RAW, SHA1, hashlib.sha1(data).digest()))

    def get_block(self, cid: str) -> bytes:
        self.calls.append(("get_block", cid))
        try:
            return self.blocks[cid]
        except KeyError as e:
            raise StoreError(f"block {cid} not found") from e

    def put_block(self, data: bytes, codec: str, hash_function: str) -> str:
        self.calls.append(("put_block", data, codec, hash_function))
        if (codec, hash_function) != ("git-raw", "sha1"):
            raise StoreError(f"unsupported codec {codec}/{hash_function}")
        cid = self._cid_for(data)
        self.blocks[cid] = data
        return cid

    def patch_link(self, root: str, path: str, child: str, create: bool = True) -> str:
        self.calls.append(("patch_link", root, path, child, create))
        try:
            links = dict(self.roots[root])
        except KeyError as e:
            raise StoreError(f"root {root} not found") from e
        links[path] = child
        serialized = json.dumps(sorted(links.items())).encode("utf-8")
        new_root = str(
            ContentId(1, DAG_PB, SHA2_256, hashlib.sha256(serialized).digest())
        )
        self.roots[new_root] = links
        return new_root


class FabricatingBlockStore(MemoryBlockStore):
    """Block store that reports a CID other than the one it should.

    With targets given, only blocks of those objects get the wrong CID.
    """

    def __init__(self, fabricated: str, targets=None) -> None:
        super().__init__()
        self.fabricated = fabricated
        self.targets = targets

    def put_block(self, data: bytes, codec: str, hash_function: str) -> str:
        cid = super().put_block(data, codec, hash_function)
        sha = hashlib.sha1(data).hexdigest().encode("ascii")
        if self.targets is not None and sha not in self.targets:
            return cid
        return self.fabricated


class FakeResponse:
    def __init__(self, status: int = 200, data: bytes = b"") -> None:
        self.status = status
        self.data = data
        self.headers = {}


class FakePoolManager:
    """Stand-in for a urllib3 PoolManager that replays canned responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests = []
        self.headers = {}

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
