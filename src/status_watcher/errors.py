# src/status_watcher/errors.py

"""
Error taxonomy.

- ConfigurationError: missing credentials / database id. Fatal at startup.
- TransientAPIError: network, timeout or remote API failure. Aborts the current
  poll cycle; the next scheduled cycle runs as usual.
- MalformedPropertyError: a property payload of unknown shape. Extractors handle
  it by falling back to defaults, so it never reaches the poller.
"""

from __future__ import annotations


class StatusWatcherError(Exception):
    """Base class for errors raised by status_watcher."""


class ConfigurationError(StatusWatcherError):
    pass


class TransientAPIError(StatusWatcherError):
    def __init__(self, message: str, *, status: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class MalformedPropertyError(StatusWatcherError):
    pass
