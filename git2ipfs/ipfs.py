# ipfs.py -- Client for the IPFS HTTP RPC API
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

"""Block store access through the IPFS (kubo) HTTP RPC API."""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Protocol
from urllib.parse import urlencode

from . import __version__
from .config import get_api_url, get_pin, get_timeout
from .errors import StoreError

if TYPE_CHECKING:
    import urllib3

    from dulwich.config import Config

__all__ = [
    "BITSWAP_MAX_BLOCK_SIZE",
    "BlockStore",
    "IpfsHttpBlockStore",
    "default_pool_manager",
    "default_user_agent_string",
]

logger = logging.getLogger(__name__)

# Nodes refuse blocks above this size unless explicitly told otherwise.
BITSWAP_MAX_BLOCK_SIZE = 1 << 20


class BlockStore(Protocol):
    """What the push pipeline needs from a content-addressed block store."""

    def get_block(self, cid: str) -> bytes:
        """Return the bytes of the block with the given CID."""
        ...

    def put_block(self, data: bytes, codec: str, hash_function: str) -> str:
        """Store a block and return the CID the store computed for it."""
        ...

    def patch_link(self, root: str, path: str, child: str, create: bool = True) -> str:
        """Point ``path`` below the dag-pb node ``root`` at ``child``.

        Returns: the CID of the new root node
        """
        ...


def default_user_agent_string() -> str:
    return "git2ipfs/{}".format(".".join(map(str, __version__)))


def default_pool_manager(timeout: Optional[float] = None) -> "urllib3.PoolManager":
    """Return a urllib3 pool manager for talking to the API.

    Args:
      timeout: Timeout for HTTP requests in seconds
    """
    import urllib3

    kwargs: dict[str, Any] = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return urllib3.PoolManager(
        headers={"User-agent": default_user_agent_string()}, **kwargs
    )


def _error_message(status: int, body: bytes) -> str:
    try:
        message = json.loads(body)["Message"]
    except (ValueError, KeyError, TypeError):
        message = body.decode("utf-8", "replace").strip()
    if message:
        return f"HTTP {status}: {message}"
    return f"HTTP {status}"


class IpfsHttpBlockStore:
    """Block store backed by a running IPFS node."""

    def __init__(
        self,
        api_url: str,
        pool_manager: Optional["urllib3.PoolManager"] = None,
        timeout: Optional[float] = None,
        pin: bool = False,
    ) -> None:
        """Initialize IpfsHttpBlockStore.

        Args:
          api_url: Base URL of the API, e.g. ``http://127.0.0.1:5001``
          pool_manager: Optional urllib3 pool manager to use
          timeout: Timeout for HTTP requests in seconds
          pin: Whether to pin blocks as they are stored
        """
        self.api_url = api_url.rstrip("/")
        self._timeout = timeout
        self.pin = pin
        if pool_manager is None:
            self.pool_manager = default_pool_manager(timeout=timeout)
        else:
            self.pool_manager = pool_manager

    @classmethod
    def from_config(
        cls,
        config: Optional["Config"],
        environ: Optional[Mapping[str, str]] = None,
        pool_manager: Optional["urllib3.PoolManager"] = None,
    ) -> "IpfsHttpBlockStore":
        """Create a block store from the ``[ipfs]`` configuration section."""
        return cls(
            get_api_url(config, environ),
            pool_manager=pool_manager,
            timeout=get_timeout(config),
            pin=get_pin(config),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.api_url!r})"

    def _get_url(self, command: str, params: Sequence[tuple[str, str]]) -> str:
        url = f"{self.api_url}/api/v0/{command}"
        if params:
            url += "?" + urlencode(params)
        return url

    def _request(
        self,
        command: str,
        params: Sequence[tuple[str, str]],
        fields: Optional[dict[str, Any]] = None,
    ) -> bytes:
        import urllib3.exceptions

        url = self._get_url(command, params)
        request_kwargs: dict[str, Any] = {}
        if fields is not None:
            request_kwargs["fields"] = fields
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout
        try:
            # The RPC API only accepts POST.
            resp = self.pool_manager.request("POST", url, **request_kwargs)
        except urllib3.exceptions.HTTPError as e:
            raise StoreError(f"{command}: {e}") from e
        if resp.status != 200:
            raise StoreError(f"{command}: {_error_message(resp.status, resp.data)}")
        return resp.data

    def _request_json(
        self,
        command: str,
        params: Sequence[tuple[str, str]],
        key: str,
        fields: Optional[dict[str, Any]] = None,
    ) -> str:
        body = self._request(command, params, fields)
        try:
            return json.loads(body)[key]
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"{command}: unexpected response {body[:200]!r}") from e

    def get_block(self, cid: str) -> bytes:
        """Fetch the raw bytes of a block."""
        return self._request("block/get", [("arg", cid)])

    def put_block(self, data: bytes, codec: str, hash_function: str) -> str:
        """Store a block, letting the node compute its CID.

        Args:
          data: Block contents
          codec: Multicodec name, e.g. ``git-raw``
          hash_function: Multihash function name, e.g. ``sha1``
        Returns: the CID reported by the node
        """
        params = [("cid-codec", codec), ("mhtype", hash_function), ("mhlen", "-1")]
        if self.pin:
            params.append(("pin", "true"))
        if len(data) > BITSWAP_MAX_BLOCK_SIZE:
            params.append(("allow-big-block", "true"))
        fields = {"file": ("block", data, "application/octet-stream")}
        return self._request_json("block/put", params, "Key", fields)

    def patch_link(self, root: str, path: str, child: str, create: bool = True) -> str:
        """Add or replace a named link in a dag-pb node.

        Args:
          root: CID of the node to patch
          path: Slash-separated link path
          child: CID the link should point to
          create: Create intermediate nodes that do not exist yet
        Returns: the CID of the new root node
        """
        params = [
            ("arg", root),
            ("arg", path),
            ("arg", child),
            ("create", "true" if create else "false"),
        ]
        return self._request_json("object/patch/add-link", params, "Hash")
