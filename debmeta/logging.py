# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging interface for debmeta.

Library modules report progress through a small Logger protocol instead of
printing directly, so they stay quiet unless the CLI (or the caller) turns
output on.

Output levels:
- Step: Always printed (e.g. "[2/3] Parsing control files...")
- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)

Example:
    Configure the global logger:
        ```python
        from debmeta.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Use in library code:
        ```python
        from debmeta.logging import get_global_logger

        logger = get_global_logger()
        logger.step(1, 3, "Loading configuration...")
        logger.verbose("CONTROL", "Read 2 paragraphs from debian/control")
        logger.debug("TOPSORT", "Generation 0: libfoo")
        ```

Note:
    The global logger is silent until set_global_logger() is called.
"""

from __future__ import annotations

from typing import Protocol, TextIO
import sys


class Logger(Protocol):
    """Protocol for logger implementations."""

    def step(self, step: int, total: int, message: str) -> None:
        """Print a step indicator.

        Args:
            step: Current step number (1-based).
            total: Total number of steps.
            message: Step description.
        """
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "CONFIG", "CONTROL").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "DEPENDS", "TOPSORT").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that prints ``[PREFIX] message`` lines.

    Steps always print; verbose and debug messages respect the flags.
    """

    def __init__(
        self, verbose: bool = False, debug: bool = False, stream: TextIO | None = None
    ) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
            stream: Output stream. Defaults to sys.stdout at write time.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout)

    def step(self, step: int, total: int, message: str) -> None:
        self._write(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that suppresses all output."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Create a DefaultLogger with the given verbosity.

    Example:
        ```python
        logger = get_logger(debug=True)
        logger.debug("DEPENDS", "Selected libfoo-dev for amd64")
        ```
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger used by library code."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the global logger.

    Args:
        logger: Logger instance to use from now on.

    Note:
        This affects every library function that calls get_global_logger().
        The CLI sets it once per command from the -v/-d flags.
    """
    global _global_logger
    _global_logger = logger
