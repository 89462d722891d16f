# visited.py -- Per-run record of objects already pushed
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

"""Set of object ids handled during a single traversal."""

import threading
from collections.abc import Iterable, Iterator
from typing import Optional

__all__ = ["VisitedSet"]


class VisitedSet:
    """Object ids that have been claimed for pushing in this run.

    The set only grows, and lives as long as the traversal that owns it.
    """

    def __init__(self, shas: Optional[Iterable[bytes]] = None) -> None:
        """Initialize a VisitedSet.

        Args:
          shas: Optional ids to treat as already handled
        """
        self._lock = threading.Lock()
        self._shas: set[bytes] = set(shas or ())

    def __contains__(self, sha: object) -> bool:
        return sha in self._shas

    def __len__(self) -> int:
        return len(self._shas)

    def __iter__(self) -> Iterator[bytes]:
        return iter(list(self._shas))

    def add(self, sha: bytes) -> None:
        """Mark sha as handled. Adding twice is harmless."""
        with self._lock:
            self._shas.add(sha)

    def claim(self, sha: bytes) -> bool:
        """Atomically mark sha as handled.

        Args:
          sha: Hex SHA of the object
        Returns: True if the caller is the first to claim sha, False if it
          was already present
        """
        with self._lock:
            if sha in self._shas:
                return False
            self._shas.add(sha)
            return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{len(self._shas)} objects>)"
