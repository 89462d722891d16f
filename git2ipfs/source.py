# source.py -- The git repository objects are pushed from
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

"""Read access to a git repository, as needed by the pusher."""

import logging
import os
from types import TracebackType
from typing import TYPE_CHECKING, Optional, Union

from dulwich.errors import NotGitRepository
from dulwich.objectspec import parse_ref
from dulwich.repo import BaseRepo, Repo

from .errors import ReferenceNotFound, RepositoryNotFound
from .objects import RawObject, fetch_raw

if TYPE_CHECKING:
    from dulwich.config import StackedConfig

__all__ = ["GitObjectSource"]

logger = logging.getLogger(__name__)


class GitObjectSource:
    """Source of git objects backed by a dulwich repository."""

    def __init__(self, repo: BaseRepo) -> None:
        self.repo = repo

    @classmethod
    def open(cls, path: Union[str, os.PathLike[str]]) -> "GitObjectSource":
        """Open the repository at path.

        Raises:
          RepositoryNotFound: if path is not a git repository
        """
        try:
            repo = Repo(path)
        except NotGitRepository as e:
            raise RepositoryNotFound(os.fspath(path)) from e
        return cls(repo)

    def close(self) -> None:
        self.repo.close()

    def __enter__(self) -> "GitObjectSource":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.repo!r})"

    def get_config(self) -> "StackedConfig":
        """Return the repository's configuration stack."""
        return self.repo.get_config_stack()

    def list_references(self) -> list[tuple[bytes, bytes]]:
        """List all references and the objects they point at.

        Symbolic references are followed; dangling ones are left out.

        Returns: list of (name, hex sha) tuples, sorted by name
        """
        return sorted(self.repo.refs.as_dict().items())

    def resolve_reference(self, name: Union[bytes, str]) -> bytes:
        """Resolve a reference name to the object id it points at.

        An exact reference name (including ``HEAD``) wins; otherwise the
        name is looked up the way git does for short names, e.g.
        ``master`` finds ``refs/heads/master``.

        Raises:
          ReferenceNotFound: if no such reference exists
        """
        if isinstance(name, str):
            name = name.encode("utf-8")
        try:
            refname = parse_ref(self.repo.refs, name)
            sha = self.repo.refs[refname]
        except KeyError as e:
            raise ReferenceNotFound(name) from e
        logger.debug("Resolved %r to %s", refname, sha.decode("ascii"))
        return sha

    def fetch_object(self, sha: bytes) -> RawObject:
        """Retrieve an object's type, size and payload."""
        return fetch_raw(self.repo.object_store, sha)
