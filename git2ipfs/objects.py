# objects.py -- Fetching git objects and rebuilding their canonical bytes
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

"""Raw git objects and their canonical (loose object) encoding.

Git hashes an object as ``<type-name> <size>\\0<payload>``. Those are the
bytes handed to IPFS, so that its SHA-1 of the block equals the git id.
"""

import logging
from hashlib import sha1
from typing import TYPE_CHECKING, NamedTuple

from dulwich.objects import Blob, Commit, Tag, Tree, object_header

from .errors import IntegrityMismatch, ObjectNotFound, StoreError, UnsupportedObjectType

if TYPE_CHECKING:
    from dulwich.object_store import BaseObjectStore

__all__ = [
    "SUPPORTED_TYPES",
    "RawObject",
    "check_raw",
    "encode_raw",
    "fetch_raw",
]

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = {
    cls.type_num: cls.type_name for cls in (Commit, Tree, Blob, Tag)
}


class RawObject(NamedTuple):
    """An object's type, declared size and undecorated payload."""

    type_num: int
    size: int
    payload: bytes

    @property
    def type_name(self) -> bytes:
        return SUPPORTED_TYPES[self.type_num]

    def as_raw_string(self) -> bytes:
        """Return the canonical bytes of this object."""
        return encode_raw(self.type_num, self.size, self.payload)


def encode_raw(type_num: int, size: int, payload: bytes) -> bytes:
    """Prepend the canonical git header to a payload.

    Args:
      type_num: Object type number
      size: Declared payload size
      payload: Object payload
    Returns: canonical bytes
    Raises:
      UnsupportedObjectType: if type_num is not a blob, tree, commit or tag
    """
    if type_num not in SUPPORTED_TYPES:
        raise UnsupportedObjectType(type_num)
    return object_header(type_num, size) + payload


def check_raw(sha: bytes, data: bytes) -> None:
    """Check that canonical bytes hash to the expected object id.

    Args:
      sha: Expected hex SHA-1
      data: Canonical bytes
    Raises:
      IntegrityMismatch: if the SHA-1 of data is not sha
    """
    got = sha1(data).hexdigest().encode("ascii")
    if got != sha:
        raise IntegrityMismatch(sha, got, "canonical bytes do not hash to object id")


def fetch_raw(object_store: "BaseObjectStore", sha: bytes) -> RawObject:
    """Retrieve an object's payload from a dulwich object store.

    Args:
      object_store: Object store to read from
      sha: Hex SHA of the object
    Returns: a RawObject
    Raises:
      ObjectNotFound: if the object is not in the store
      UnsupportedObjectType: if the object is not one of the four git types
      StoreError: if the store could not be read
    """
    try:
        type_num, payload = object_store.get_raw(sha)
    except KeyError as e:
        raise ObjectNotFound(sha) from e
    except OSError as e:
        raise StoreError(f"reading object {sha.decode('ascii')}: {e}") from e
    if type_num not in SUPPORTED_TYPES:
        raise UnsupportedObjectType(type_num, sha)
    logger.debug(
        "Object %s is a %s of %d bytes",
        sha.decode("ascii"),
        SUPPORTED_TYPES[type_num].decode("ascii"),
        len(payload),
    )
    return RawObject(type_num, len(payload), payload)
