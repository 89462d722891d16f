# cid.py -- Content identifiers for git objects
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

"""Mapping between git object ids and IPFS content identifiers.

A git object id is the SHA-1 of the object's canonical bytes. IPFS can
store those same bytes under the ``git-raw`` codec with a ``sha1``
multihash, in which case the node computes exactly the digest git did.
The CID of a git object can therefore be derived from its id alone::

    <0x01 cidv1> <0x78 git-raw> <0x11 sha1> <0x14 length> <20 digest bytes>

rendered in base32 multibase (leading ``b``).
"""

import base64
import binascii
from typing import NamedTuple

from dulwich.objects import hex_to_sha, sha_to_hex, valid_hexsha

from .varint import decode_varint, encode_varint

__all__ = [
    "DAG_PB",
    "GIT_RAW",
    "SHA1",
    "SHA2_256",
    "ContentId",
    "InvalidContentId",
    "decode_multihash",
    "encode_multihash",
    "translate",
]

# Multicodec table entries we need.
GIT_RAW = 0x78
DAG_PB = 0x70
SHA1 = 0x11
SHA2_256 = 0x12

CODEC_NAMES = {GIT_RAW: "git-raw", DAG_PB: "dag-pb"}
HASH_NAMES = {SHA1: "sha1", SHA2_256: "sha2-256"}

CID_VERSION = 1


class InvalidContentId(ValueError):
    """A string or byte sequence is not a CID we understand."""


def encode_multihash(code: int, digest: bytes) -> bytes:
    """Encode a multihash.

    Args:
      code: Multicodec code of the hash function
      digest: Raw digest bytes
    Returns: multihash bytes
    """
    return encode_varint(code) + encode_varint(len(digest)) + digest


def decode_multihash(data: bytes, offset: int = 0) -> tuple[int, bytes, int]:
    """Decode a multihash.

    Args:
      data: Buffer holding the multihash
      offset: Where the multihash starts
    Returns: tuple of (hash code, digest, offset after the multihash)
    Raises:
      InvalidContentId: if the buffer is truncated
    """
    try:
        code, offset = decode_varint(data, offset)
        length, offset = decode_varint(data, offset)
    except ValueError as e:
        raise InvalidContentId(f"bad multihash: {e}") from e
    digest = data[offset : offset + length]
    if len(digest) != length:
        raise InvalidContentId(
            f"multihash digest truncated: expected {length} bytes, got {len(digest)}"
        )
    return code, digest, offset + length


def _b32decode(text: str) -> bytes:
    padded = text.upper() + "=" * (-len(text) % 8)
    return base64.b32decode(padded)


class ContentId(NamedTuple):
    """A version 1 content identifier."""

    version: int
    codec: int
    hash_code: int
    digest: bytes

    def encode(self) -> bytes:
        """Return the binary form of this CID."""
        return (
            encode_varint(self.version)
            + encode_varint(self.codec)
            + encode_multihash(self.hash_code, self.digest)
        )

    def multihash(self) -> bytes:
        """Return the multihash part of this CID."""
        return encode_multihash(self.hash_code, self.digest)

    def __str__(self) -> str:
        encoded = base64.b32encode(self.encode()).decode("ascii")
        return "b" + encoded.rstrip("=").lower()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @property
    def codec_name(self) -> str:
        return CODEC_NAMES.get(self.codec, hex(self.codec))

    @property
    def hash_name(self) -> str:
        return HASH_NAMES.get(self.hash_code, hex(self.hash_code))

    def to_sha(self) -> bytes:
        """Return the git object id this CID was derived from.

        Raises:
          InvalidContentId: if this is not a git-raw SHA-1 CID
        """
        if self.codec != GIT_RAW or self.hash_code != SHA1 or len(self.digest) != 20:
            raise InvalidContentId(f"{self} does not address a git object")
        return sha_to_hex(self.digest)

    @classmethod
    def decode(cls, data: bytes) -> "ContentId":
        """Parse a binary CIDv1.

        Raises:
          InvalidContentId: if data is not a complete CIDv1
        """
        try:
            version, offset = decode_varint(data)
            codec, offset = decode_varint(data, offset)
        except ValueError as e:
            raise InvalidContentId(f"bad CID prefix: {e}") from e
        if version != CID_VERSION:
            raise InvalidContentId(f"unsupported CID version {version}")
        hash_code, digest, offset = decode_multihash(data, offset)
        if offset != len(data):
            raise InvalidContentId("trailing bytes after CID")
        return cls(version, codec, hash_code, digest)

    @classmethod
    def parse(cls, text: str) -> "ContentId":
        """Parse a multibase CIDv1 string.

        Only the base32 (``b``/``B``) and base16 (``f``) multibase
        prefixes are accepted; CIDv0 (``Qm...``) is rejected.

        Raises:
          InvalidContentId: if text is not such a CID
        """
        if not text:
            raise InvalidContentId("empty CID")
        prefix, body = text[0], text[1:]
        if prefix in ("b", "B"):
            decoder = _b32decode
        elif prefix == "f":
            decoder = bytes.fromhex
        else:
            raise InvalidContentId(f"unsupported multibase prefix {prefix!r}")
        try:
            data = decoder(body)
        except (binascii.Error, ValueError) as e:
            raise InvalidContentId(f"invalid CID {text!r}: {e}") from e
        return cls.decode(data)


def translate(sha: bytes) -> ContentId:
    """Return the CID under which IPFS stores the git object ``sha``.

    Args:
      sha: 40-character hex SHA-1 of a git object
    Returns: the git-raw/sha1 ContentId
    Raises:
      ValueError: if sha is not a hex SHA-1
    """
    if isinstance(sha, str):
        sha = sha.encode("ascii")
    if len(sha) != 40 or not valid_hexsha(sha):
        raise ValueError(f"not a hex SHA-1: {sha!r}")
    return ContentId(CID_VERSION, GIT_RAW, SHA1, hex_to_sha(sha))
