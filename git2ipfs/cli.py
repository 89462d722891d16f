# cli.py -- Command-line interface for git2ipfs
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

"""Command-line interface to git2ipfs.

Usage: git2ipfs <repository-path> <reference-name> [<existing-root-cid>]
"""

import argparse
import logging
import signal
import sys
from collections.abc import Sequence
from typing import Optional

from . import porcelain
from .errors import Git2IpfsError
from .ipfs import BlockStore
from .log_utils import default_logging_config

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git2ipfs",
        description="Push the objects reachable from a git reference to IPFS.",
    )
    parser.add_argument("repository", help="Path to the git repository")
    parser.add_argument("ref", help="Reference to push, e.g. refs/heads/master")
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="CID of an existing root to add the reference to",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None, store: Optional[BlockStore] = None
) -> int:
    """Main entry point for the git2ipfs CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        store: Block store to push to, instead of the configured IPFS node

    Returns:
        Exit code
    """
    if argv is None:
        argv = sys.argv[1:]
    args = _make_parser().parse_args(argv)

    default_logging_config()

    try:
        result = porcelain.push_ref(args.repository, args.ref, args.root, store=store)
    except Git2IpfsError as e:
        logger.error("%s", e)
        return 1
    sys.stdout.write(f"{result.root}\n")
    return 0


def signal_int(signal: int, frame: object) -> None:
    """Handle interrupt signal by exiting."""
    sys.exit(1)


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)
    sys.exit(main())


if __name__ == "__main__":
    _main()
