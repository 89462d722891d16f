# config.py -- Reading git2ipfs settings
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

"""Settings, read from the ``[ipfs]`` section of the git configuration.

Recognised keys::

    [ipfs]
        api = http://127.0.0.1:5001
        timeout = 30
        pin = true
        maxBlockSize = 2097152

When ``ipfs.api`` is not set, the address the local IPFS daemon advertises
in ``$IPFS_PATH/api`` is used, and failing that the default API port on
localhost.
"""

import logging
import os
from collections.abc import Mapping
from typing import Optional

from dulwich.config import Config

from .errors import ConfigError

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_MAX_BLOCK_SIZE",
    "api_url_from_multiaddr",
    "get_api_url",
    "get_max_block_size",
    "get_pin",
    "get_timeout",
]

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:5001"

# 2 MiB. Larger objects would need chunking, which is not supported.
DEFAULT_MAX_BLOCK_SIZE = 1 << 21

SECTION = (b"ipfs",)


def _get_str(config: Optional[Config], name: bytes) -> Optional[str]:
    if config is None:
        return None
    try:
        value = config.get(SECTION, name)
    except KeyError:
        return None
    if value is None:
        return None
    return value.decode("utf-8")


def api_url_from_multiaddr(addr: str) -> str:
    """Convert an API multiaddr such as ``/ip4/127.0.0.1/tcp/5001`` to a URL.

    Raises:
      ConfigError: if the multiaddr is not a TCP address we understand
    """
    parts = addr.strip().split("/")
    # A leading slash yields an empty first element.
    if len(parts) < 5 or parts[0] != "" or parts[3] != "tcp":
        raise ConfigError(f"unsupported API multiaddr: {addr!r}")
    proto, host, port = parts[1], parts[2], parts[4]
    if proto == "ip6":
        host = f"[{host}]"
    elif proto not in ("ip4", "dns", "dns4", "dns6"):
        raise ConfigError(f"unsupported API multiaddr: {addr!r}")
    scheme = "https" if "https" in parts[5:] else "http"
    return f"{scheme}://{host}:{port}"


def _ipfs_path(environ: Mapping[str, str]) -> str:
    path = environ.get("IPFS_PATH")
    if path:
        return path
    return os.path.join(os.path.expanduser("~"), ".ipfs")


def get_api_url(
    config: Optional[Config] = None, environ: Optional[Mapping[str, str]] = None
) -> str:
    """Determine the base URL of the IPFS HTTP API.

    Args:
      config: Git configuration to consult, if any
      environ: Environment variables (defaults to os.environ)
    Returns: base URL, without a trailing slash
    """
    url = _get_str(config, b"api")
    if url:
        return url.rstrip("/")
    if environ is None:
        environ = os.environ
    api_file = os.path.join(_ipfs_path(environ), "api")
    try:
        with open(api_file) as f:
            addr = f.read()
    except FileNotFoundError:
        return DEFAULT_API_URL
    except OSError as e:
        logger.warning("Unable to read %s: %s", api_file, e)
        return DEFAULT_API_URL
    return api_url_from_multiaddr(addr)


def get_timeout(config: Optional[Config]) -> Optional[float]:
    """Return the HTTP timeout in seconds, or None for no timeout."""
    value = _get_str(config, b"timeout")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"invalid ipfs.timeout: {value!r}") from e


def get_pin(config: Optional[Config]) -> bool:
    """Return whether pushed blocks should be pinned."""
    if config is None:
        return False
    try:
        return bool(config.get_boolean(SECTION, b"pin", False))
    except ValueError as e:
        raise ConfigError(f"invalid ipfs.pin: {e}") from e


def get_max_block_size(config: Optional[Config]) -> int:
    """Return the size at which objects are rejected as oversized."""
    value = _get_str(config, b"maxBlockSize")
    if value is None:
        return DEFAULT_MAX_BLOCK_SIZE
    try:
        size = int(value)
    except ValueError as e:
        raise ConfigError(f"invalid ipfs.maxBlockSize: {value!r}") from e
    if size <= 0:
        raise ConfigError(f"invalid ipfs.maxBlockSize: {value!r}")
    return size
