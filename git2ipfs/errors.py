# errors.py -- errors for git2ipfs
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

"""git2ipfs exception classes.

Every error aborts the whole traversal; none of them is recovered from
inside the library.
"""

from typing import Optional, Union


class Git2IpfsError(Exception):
    """Base class for all git2ipfs errors."""


class ConfigError(Git2IpfsError):
    """A configuration value could not be interpreted."""


class NotFound(Git2IpfsError):
    """Something that was asked for does not exist in the source."""


class RepositoryNotFound(NotFound):
    """The given path is not a git repository."""

    def __init__(self, path: str) -> None:
        """Initialize RepositoryNotFound.

        Args:
          path: Path that was opened
        """
        self.path = path
        super().__init__(f"not a git repository: {path}")


class ReferenceNotFound(NotFound):
    """A reference does not exist in the repository."""

    def __init__(self, name: Union[bytes, str]) -> None:
        """Initialize ReferenceNotFound.

        Args:
          name: The reference name that could not be resolved
        """
        if isinstance(name, bytes):
            name = name.decode("utf-8", "replace")
        self.name = name
        super().__init__(f"no such reference: {name}")


class ObjectNotFound(NotFound):
    """An object is missing from the source object store."""

    def __init__(self, sha: bytes) -> None:
        """Initialize ObjectNotFound.

        Args:
          sha: Hex SHA of the missing object
        """
        self.sha = sha
        super().__init__(f"object {sha.decode('ascii')} not found")


class UnsupportedObjectType(Git2IpfsError):
    """An object is not a blob, tree, commit or tag."""

    def __init__(self, type_num: object, sha: Optional[bytes] = None) -> None:
        """Initialize UnsupportedObjectType.

        Args:
          type_num: The offending type number
          sha: Hex SHA of the object, if known
        """
        self.type_num = type_num
        self.sha = sha
        if sha is not None:
            msg = f"object {sha.decode('ascii')} has unsupported type {type_num!r}"
        else:
            msg = f"unsupported object type {type_num!r}"
        super().__init__(msg)


class OversizedObject(Git2IpfsError):
    """An object's canonical form does not fit in a single block."""

    def __init__(self, sha: bytes, size: int, limit: int) -> None:
        """Initialize OversizedObject.

        Args:
          sha: Hex SHA of the object
          size: Length of the object's canonical bytes
          limit: The block size limit that was hit
        """
        self.sha = sha
        self.size = size
        self.limit = limit
        super().__init__(
            f"object {sha.decode('ascii')} is {size} bytes, "
            f"limit is {limit} bytes (chunking is not supported)"
        )


class ObjectParseError(Git2IpfsError):
    """An object's payload could not be parsed for links."""

    def __init__(self, sha: Optional[bytes], reason: str) -> None:
        """Initialize ObjectParseError.

        Args:
          sha: Hex SHA of the object, if known
          reason: What is wrong with the payload
        """
        self.sha = sha
        self.reason = reason
        if sha is not None:
            super().__init__(f"malformed object {sha.decode('ascii')}: {reason}")
        else:
            super().__init__(f"malformed object: {reason}")


class IntegrityMismatch(Git2IpfsError):
    """An identifier did not match the one it was expected to be."""

    def __init__(
        self,
        expected: Union[bytes, str],
        got: Union[bytes, str],
        extra: Optional[str] = None,
    ) -> None:
        """Initialize IntegrityMismatch.

        Args:
          expected: The expected identifier (hex SHA or CID)
          got: The identifier that was actually computed or returned
          extra: Optional additional error information
        """
        if isinstance(expected, bytes):
            expected = expected.decode("ascii", "replace")
        if isinstance(got, bytes):
            got = got.decode("ascii", "replace")
        self.expected = expected
        self.got = got
        self.extra = extra
        message = f"Integrity mismatch: Expected {expected}, got {got}"
        if extra is not None:
            message += f"; {extra}"
        super().__init__(message)


class StoreError(Git2IpfsError):
    """The source or destination store failed to service a request."""
