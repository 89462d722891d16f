# varint.py -- Unsigned variable-width integers for multiformats
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

"""Unsigned varint encoding/decoding.

Multiformats (CIDs, multihashes, multicodec tags) prefix every field with
an unsigned LEB128 integer: 7 bits per byte, least significant group
first, with the high bit set on every byte but the last.
"""

__all__ = ["MAX_VARINT_LEN", "decode_varint", "encode_varint"]

# Multiformats varints carry at most 63 bits.
MAX_VARINT_LEN = 9


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned varint.

    Args:
      value: Integer to encode
    Returns:
      Encoded bytes
    Raises:
      ValueError: if value is negative
    """
    if value < 0:
        raise ValueError(f"varint value must be non-negative: {value}")
    if value == 0:
        return b"\x00"

    result = []
    while value > 0:
        byte = value & 0x7F
        value >>= 7
        if value > 0:
            byte |= 0x80
        result.append(byte)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned varint from bytes.

    Args:
      data: Bytes to decode from
      offset: Starting offset in data
    Returns:
      tuple of (decoded_value, new_offset)
    Raises:
      ValueError: if the data ends before the varint does, or the varint
        is longer than MAX_VARINT_LEN bytes
    """
    value = 0
    shift = 0
    pos = offset

    while True:
        if pos >= len(data):
            raise ValueError("truncated varint")
        if pos - offset >= MAX_VARINT_LEN:
            raise ValueError("varint too long")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        shift += 7
        if not (byte & 0x80):
            break

    return value, pos
