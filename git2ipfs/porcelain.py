# porcelain.py -- High-level git2ipfs operations
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

"""Simple wrapper that provides porcelain-like functions on top of git2ipfs.

Currently implemented:
 * push_ref
"""

import logging
import os
from collections.abc import Callable
from contextlib import AbstractContextManager, closing, nullcontext
from typing import NamedTuple, Optional, Union

from dulwich.repo import BaseRepo

from .cid import ContentId
from .config import get_max_block_size
from .errors import Git2IpfsError
from .ipfs import BlockStore, IpfsHttpBlockStore
from .push import GraphPusher, RootUpdater
from .source import GitObjectSource

__all__ = ["PushResult", "open_source_closing", "push_ref"]

logger = logging.getLogger(__name__)

RepoPath = Union[str, os.PathLike[str], BaseRepo, GitObjectSource]


class PushResult(NamedTuple):
    """Outcome of pushing a reference."""

    sha: bytes
    cid: ContentId
    root: str
    pushed: int


def open_source_closing(
    path_or_repo: RepoPath,
) -> AbstractContextManager[GitObjectSource]:
    """Open an argument that can be a repository, a source or a path.

    Returns a context manager that closes the repository on exit if it was
    opened here, and does nothing otherwise.
    """
    if isinstance(path_or_repo, GitObjectSource):
        return nullcontext(path_or_repo)
    if isinstance(path_or_repo, BaseRepo):
        return nullcontext(GitObjectSource(path_or_repo))
    return closing(GitObjectSource.open(path_or_repo))


def push_ref(
    repo: RepoPath,
    ref: Union[str, bytes],
    base: Optional[str] = None,
    store: Optional[BlockStore] = None,
    progress: Optional[Callable[[bytes], None]] = None,
) -> PushResult:
    """Push the objects reachable from a reference and link it into a root.

    Args:
      repo: Path to repository, or a repository
      ref: Reference name; also used as the link path in the root
      base: CID of an existing aggregate root; the empty dag-pb node is
        used if not given
      store: Block store to push to; defaults to the IPFS node the
        repository configuration points at
      progress: Optional function to report progress to
    Returns: a PushResult
    Raises:
      Git2IpfsError: on any failure. Objects pushed before the failure
        remain in the store.
    """
    if isinstance(ref, bytes):
        ref = ref.decode("utf-8")
    with open_source_closing(repo) as source:
        config = source.get_config()
        if store is None:
            store = IpfsHttpBlockStore.from_config(config)

        for name, target in source.list_references():
            logger.debug(
                "Ref: %s -> %s",
                name.decode("utf-8", "replace"),
                target.decode("ascii"),
            )
        sha = source.resolve_reference(ref)
        logger.info("Reference %s is at %s", ref, sha.decode("ascii"))

        updater = RootUpdater(store)
        if base is None:
            updater.fetch_empty_root()

        pusher = GraphPusher(
            source, store, max_block_size=get_max_block_size(config), progress=progress
        )
        try:
            cid = pusher.push(sha)
        except Git2IpfsError:
            logger.warning("Push aborted; %d objects were stored", pusher.pushed)
            raise
        logger.info("Reference %s should be at %s", ref, cid)

        new_root = updater.update(cid, ref, base)
        logger.info("New root should be at %s", new_root)
    return PushResult(sha, cid, new_root, pusher.pushed)
