# test_cid.py -- Tests for git2ipfs.cid
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

"""Tests for git2ipfs.cid."""

from dulwich.objects import Blob

from git2ipfs.cid import (
    DAG_PB,
    GIT_RAW,
    SHA1,
    SHA2_256,
    ContentId,
    InvalidContentId,
    decode_multihash,
    encode_multihash,
    translate,
)
from git2ipfs.push import EMPTY_DAG_PB

from . import TestCase

ZERO_SHA = b"0" * 40
ZERO_CID = "baf4bcf" + "a" * 33
EMPTY_BLOB_SHA = b"e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


class TranslateTests(TestCase):
    def test_zero_sha(self) -> None:
        self.assertEqual(ZERO_CID, str(translate(ZERO_SHA)))

    def test_fields(self) -> None:
        cid = translate(EMPTY_BLOB_SHA)
        self.assertEqual(1, cid.version)
        self.assertEqual(GIT_RAW, cid.codec)
        self.assertEqual(SHA1, cid.hash_code)
        self.assertEqual(bytes.fromhex(EMPTY_BLOB_SHA.decode("ascii")), cid.digest)
        self.assertEqual("git-raw", cid.codec_name)
        self.assertEqual("sha1", cid.hash_name)

    def test_binary_layout(self) -> None:
        cid = translate(EMPTY_BLOB_SHA)
        self.assertEqual(
            b"\x01\x78\x11\x14" + bytes.fromhex(EMPTY_BLOB_SHA.decode("ascii")),
            cid.encode(),
        )
        self.assertEqual(b"\x11\x14" + cid.digest, cid.multihash())

    def test_git_prefix(self) -> None:
        cid = translate(Blob.from_string(b"foo").id)
        self.assertTrue(str(cid).startswith("baf4bcf"))

    def test_deterministic(self) -> None:
        sha = Blob.from_string(b"some content").id
        self.assertEqual(translate(sha), translate(sha))
        self.assertEqual(str(translate(sha)), str(translate(sha)))

    def test_injective(self) -> None:
        a = Blob.from_string(b"a").id
        b = Blob.from_string(b"b").id
        self.assertNotEqual(translate(a), translate(b))

    def test_str_sha(self) -> None:
        self.assertEqual(translate(ZERO_SHA), translate("0" * 40))

    def test_invalid(self) -> None:
        self.assertRaises(ValueError, translate, b"abc")
        self.assertRaises(ValueError, translate, b"g" * 40)
        self.assertRaises(ValueError, translate, b"0" * 64)

    def test_to_sha(self) -> None:
        self.assertEqual(EMPTY_BLOB_SHA, translate(EMPTY_BLOB_SHA).to_sha())


class ContentIdParseTests(TestCase):
    def test_roundtrip_string(self) -> None:
        cid = translate(EMPTY_BLOB_SHA)
        self.assertEqual(cid, ContentId.parse(str(cid)))

    def test_uppercase_base32(self) -> None:
        cid = translate(EMPTY_BLOB_SHA)
        self.assertEqual(cid, ContentId.parse("B" + str(cid)[1:].upper()))

    def test_base16(self) -> None:
        cid = translate(EMPTY_BLOB_SHA)
        self.assertEqual(cid, ContentId.parse("f" + cid.encode().hex()))

    def test_empty_dag_pb(self) -> None:
        cid = ContentId.parse(EMPTY_DAG_PB)
        self.assertEqual(1, cid.version)
        self.assertEqual(DAG_PB, cid.codec)
        self.assertEqual(SHA2_256, cid.hash_code)
        self.assertEqual(32, len(cid.digest))
        self.assertEqual(EMPTY_DAG_PB, str(cid))
        self.assertRaises(InvalidContentId, cid.to_sha)

    def test_invalid(self) -> None:
        self.assertRaises(InvalidContentId, ContentId.parse, "")
        self.assertRaises(
            InvalidContentId,
            ContentId.parse,
            "QmUNLLsPACCz1vLxQVkXqqLX5R1X345qqfHbsf67hvA3Nn",
        )
        self.assertRaises(InvalidContentId, ContentId.parse, "b!!!!")
        self.assertRaises(InvalidContentId, ContentId.parse, "fzz")

    def test_truncated(self) -> None:
        data = translate(EMPTY_BLOB_SHA).encode()
        self.assertRaises(InvalidContentId, ContentId.decode, data[:-1])
        self.assertRaises(InvalidContentId, ContentId.decode, data + b"\x00")
        self.assertRaises(InvalidContentId, ContentId.decode, b"")

    def test_version_zero_rejected(self) -> None:
        data = b"\x00\x78" + encode_multihash(SHA1, b"\x00" * 20)
        self.assertRaises(InvalidContentId, ContentId.decode, data)

    def test_is_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidContentId, ValueError))


class MultihashTests(TestCase):
    def test_roundtrip(self) -> None:
        mh = encode_multihash(SHA1, b"\x01" * 20)
        self.assertEqual(b"\x11\x14" + b"\x01" * 20, mh)
        self.assertEqual((SHA1, b"\x01" * 20, 22), decode_multihash(mh))

    def test_truncated(self) -> None:
        self.assertRaises(InvalidContentId, decode_multihash, b"\x11\x14\x00")
        self.assertRaises(InvalidContentId, decode_multihash, b"\x11")
