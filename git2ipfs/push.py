# push.py -- Pushing git object graphs into a block store
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

"""Walking the git object graph and pushing every object once.

The walk is depth-first over an explicit stack, so neither long commit
chains nor deep trees grow the Python call stack. An object's block is
stored only after all of its children have been stored; a parent in the
block store never refers to a block that is not there.
"""

import logging
from collections.abc import Callable, Iterator
from typing import NamedTuple, Optional, Protocol

from .cid import ContentId, InvalidContentId, translate
from .config import DEFAULT_MAX_BLOCK_SIZE
from .errors import IntegrityMismatch, OversizedObject
from .ipfs import BlockStore
from .links import extract_links
from .objects import RawObject, check_raw
from .visited import VisitedSet

__all__ = [
    "EMPTY_DAG_PB",
    "GIT_RAW_CODEC",
    "SHA1_HASH_FUNCTION",
    "GraphPusher",
    "ObjectSource",
    "RootUpdater",
]

logger = logging.getLogger(__name__)

# Names the block store uses for the git-raw codec and SHA-1.
GIT_RAW_CODEC = "git-raw"
SHA1_HASH_FUNCTION = "sha1"

# The empty dag-pb directory (CIDv1, sha2-256).
EMPTY_DAG_PB = "bafybeiczsscdsbs7ffqz55asqdf3smv6klcw3gofszvwlyarci47bgf354"


class ObjectSource(Protocol):
    """Where the pusher reads objects from."""

    def fetch_object(self, sha: bytes) -> RawObject: ...


class _Pending(NamedTuple):
    sha: bytes
    data: bytes
    children: Iterator[bytes]


class GraphPusher:
    """Push everything reachable from an object into a block store."""

    def __init__(
        self,
        source: ObjectSource,
        store: BlockStore,
        max_block_size: int = DEFAULT_MAX_BLOCK_SIZE,
        visited: Optional[VisitedSet] = None,
        progress: Optional[Callable[[bytes], None]] = None,
    ) -> None:
        """Initialize a GraphPusher.

        Args:
          source: Object source to read from
          store: Block store to push to
          max_block_size: Objects whose canonical form is at least this
            long are refused
          visited: Objects already handled in this run; a fresh set is
            created if not given
          progress: Optional function to report progress to
        """
        self.source = source
        self.store = store
        self.max_block_size = max_block_size
        if visited is None:
            visited = VisitedSet()
        self.visited = visited
        if progress is None:
            self.progress: Callable[[bytes], None] = lambda x: None
        else:
            self.progress = progress
        self.pushed = 0

    def _load(self, sha: bytes) -> _Pending:
        obj = self.source.fetch_object(sha)
        data = obj.as_raw_string()
        if len(data) >= self.max_block_size:
            raise OversizedObject(sha, len(data), self.max_block_size)
        check_raw(sha, data)
        links = extract_links(obj.type_num, obj.payload, sha)
        logger.debug("Object %s linked to %r", sha.decode("ascii"), links)
        return _Pending(sha, data, iter(links))

    def _put(self, sha: bytes, data: bytes) -> ContentId:
        expected = translate(sha)
        got = self.store.put_block(data, GIT_RAW_CODEC, SHA1_HASH_FUNCTION)
        try:
            matches = ContentId.parse(got) == expected
        except InvalidContentId:
            matches = False
        if not matches:
            raise IntegrityMismatch(
                str(expected), got, f"block store result for {sha.decode('ascii')}"
            )
        self.pushed += 1
        logger.debug("Pushed %s to %s", sha.decode("ascii"), got)
        if self.pushed % 1000 == 0:
            self.progress(f"pushing objects: {self.pushed}\r".encode("ascii"))
        return expected

    def push(self, sha: bytes) -> ContentId:
        """Push sha and every object reachable from it.

        Objects already in the visited set are skipped, along with
        everything below them.

        Blocks are stored children first, so an object is submitted only
        after its whole subtree is in the store. Size, content hash and
        link checks happen before descending; the check of the CID the
        store returns for an object necessarily happens after its subtree
        has been stored, and those blocks stay stored if it fails.

        Args:
          sha: Hex SHA of the object to start from
        Returns: the CID of sha in the block store
        Raises:
          NotFound, UnsupportedObjectType, OversizedObject, ObjectParseError,
          IntegrityMismatch, StoreError: on any failure; the walk stops
            immediately and objects already pushed stay pushed
        """
        root = translate(sha)
        if not self.visited.claim(sha):
            return root
        stack = [self._load(sha)]
        while stack:
            pending = stack[-1]
            for child in pending.children:
                if self.visited.claim(child):
                    stack.append(self._load(child))
                    break
            else:
                stack.pop()
                self._put(pending.sha, pending.data)
        self.progress(f"pushing objects: {self.pushed}, done.\n".encode("ascii"))
        return root


class RootUpdater:
    """Link pushed objects into an aggregate dag-pb root."""

    def __init__(self, store: BlockStore, empty_root: str = EMPTY_DAG_PB) -> None:
        """Initialize a RootUpdater.

        Args:
          store: Block store holding the root
          empty_root: CID to start from when no existing root is given
        """
        self.store = store
        self.empty_root = empty_root

    def fetch_empty_root(self) -> bytes:
        """Retrieve the empty root block, making sure the store has it."""
        return self.store.get_block(self.empty_root)

    def update(self, root: ContentId, path: str, base: Optional[str] = None) -> str:
        """Point path below base at root.

        Args:
          root: CID of the pushed object
          path: Link path, e.g. the reference name
          base: CID of the existing aggregate root, or None for the empty one
        Returns: the CID of the new aggregate root
        Raises:
          StoreError: if the store refuses the patch; pushed objects remain
        """
        if base is None:
            base = self.empty_root
        new_root = self.store.patch_link(base, path, str(root), create=True)
        logger.debug("Linked %s as %s under %s: %s", root, path, base, new_root)
        return new_root
