# log_utils.py -- Logging utilities for git2ipfs
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

"""Logging utilities for git2ipfs.

git2ipfs is usable as a library, and library users may not want any
logging output. The package logger therefore carries a null handler until
the command line (or the caller) asks for real output with
default_logging_config.
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Optional, Union

__all__ = ["default_logging_config", "get_trace_target", "remove_null_handler"]


class _NullHandler(logging.Handler):
    """No-op logging handler to avoid unexpected logging warnings."""

    def emit(self, record: logging.LogRecord) -> None:
        pass


_NULL_HANDLER = _NullHandler()
_GIT2IPFS_LOGGER = logging.getLogger("git2ipfs")
_GIT2IPFS_LOGGER.addHandler(_NULL_HANDLER)

TRACE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def get_trace_target(
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Union[str, int]]:
    """Get the trace target from the GIT_TRACE environment variable.

    Returns:
        - None if tracing is disabled
        - 2 for stderr output (values "1", "2", "true")
        - str for an absolute file path
    """
    if environ is None:
        environ = os.environ
    trace_value = environ.get("GIT_TRACE", "")

    if not trace_value or trace_value.lower() in ("0", "false"):
        return None

    if trace_value.lower() in ("1", "2", "true"):
        return 2

    if os.path.isabs(trace_value):
        return trace_value

    return None


def remove_null_handler() -> None:
    """Remove the null handler from the git2ipfs logger."""
    _GIT2IPFS_LOGGER.removeHandler(_NULL_HANDLER)


def default_logging_config(environ: Optional[Mapping[str, str]] = None) -> None:
    """Set up logging for command line use.

    With GIT_TRACE set, DEBUG output goes to stderr or to the named file;
    otherwise INFO messages go to stderr.
    """
    remove_null_handler()

    trace_target = get_trace_target(environ)
    if trace_target == 2:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=TRACE_FORMAT)
        return
    if isinstance(trace_target, str):
        try:
            logging.basicConfig(
                level=logging.DEBUG,
                filename=trace_target,
                filemode="a",
                format=TRACE_FORMAT,
            )
            return
        except OSError as e:
            sys.stderr.write(
                f"Warning: Failed to open GIT_TRACE file {trace_target}: {e}\n"
            )

    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(levelname)s: %(message)s",
    )
