# links.py -- Child references of git objects
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

"""Extraction of the object ids a git object refers to.

The rules follow the git object model:

* a blob refers to nothing;
* a tree refers to every entry, submodule commits included;
* a commit refers to its tree, then its parents in header order;
* a tag refers to the object it tags.
"""

from typing import Optional

from dulwich.errors import ObjectFormatException
from dulwich.objects import Blob, Commit, ShaFile, Tag, Tree, valid_hexsha

from .errors import ObjectParseError, UnsupportedObjectType

__all__ = ["extract_links", "parse_object"]


def parse_object(type_num: int, payload: bytes, sha: Optional[bytes] = None) -> ShaFile:
    """Parse a payload with dulwich's object classes.

    Raises:
      ObjectParseError: if dulwich rejects the payload
    """
    try:
        return ShaFile.from_raw_string(type_num, payload, sha=sha)
    except (ObjectFormatException, ValueError) as e:
        raise ObjectParseError(sha, str(e)) from e


def _check_links(links: list[bytes], sha: Optional[bytes]) -> list[bytes]:
    for link in links:
        if len(link) != 40 or not valid_hexsha(link):
            raise ObjectParseError(sha, f"invalid object id {link!r}")
    return links


def _commit_links(commit: Commit, sha: Optional[bytes]) -> list[bytes]:
    if commit.tree is None:
        raise ObjectParseError(sha, "commit has no tree")
    return _check_links([commit.tree] + list(commit.parents), sha)


def _tree_links(tree: Tree, sha: Optional[bytes]) -> list[bytes]:
    return _check_links([entry.sha for entry in tree.iteritems()], sha)


def _tag_links(tag: Tag, sha: Optional[bytes]) -> list[bytes]:
    # dulwich leaves the slots unset when the object or type header is absent.
    try:
        _, tagged = tag.object
    except AttributeError as e:
        raise ObjectParseError(sha, "tag has no object or type header") from e
    if tagged is None:
        raise ObjectParseError(sha, "tag has no object")
    return _check_links([tagged], sha)


_LINK_EXTRACTORS = {
    Commit.type_num: _commit_links,
    Tree.type_num: _tree_links,
    Tag.type_num: _tag_links,
}


def extract_links(
    type_num: int, payload: bytes, sha: Optional[bytes] = None
) -> list[bytes]:
    """Return the ids of the objects an object refers to.

    Args:
      type_num: Object type number
      payload: Object payload, without the canonical header
      sha: Hex SHA of the object, used in error messages
    Returns: list of hex SHAs, in the order the object lists them
    Raises:
      UnsupportedObjectType: for an unknown type number
      ObjectParseError: if the payload is malformed or lacks a required field
    """
    if type_num == Blob.type_num:
        return []
    try:
        extractor = _LINK_EXTRACTORS[type_num]
    except KeyError as e:
        raise UnsupportedObjectType(type_num, sha) from e
    obj = parse_object(type_num, payload, sha)
    try:
        return extractor(obj, sha)
    except (ObjectFormatException, ValueError) as e:
        raise ObjectParseError(sha, str(e)) from e
