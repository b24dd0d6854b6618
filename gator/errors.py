# -*- coding: utf-8 -*-
"""
Exception taxonomy

Public API:
- `GatorError`
- `FetchError`, `NetworkError`, `FetchTimeoutError`, `HTTPStatusError`
- `ParseError`
- `DuplicateEntryError`
- `CommandError`, `NotLoggedInError`, `NotFoundError`, `ConflictError`

Purpose:
- Feed-level failures (`FetchError`, `ParseError`) are caught by the scheduler
  and never end the polling loop.
- `DuplicateEntryError` is raised by the post DAO and absorbed by the reconciler.
- `CommandError` subclasses are reported to the operator by the CLI.
"""

from __future__ import annotations


class GatorError(RuntimeError):
    """Base class for all application errors."""


class FetchError(GatorError):
    """Retrieving a feed over the network failed."""

    transient = False


class NetworkError(FetchError):
    """Transport failure: DNS, connection refused, reset, invalid URL."""

    transient = True


class FetchTimeoutError(NetworkError, TimeoutError):
    """The fetch did not complete within its time budget."""


class HTTPStatusError(FetchError):
    """The remote answered with a non-2xx status."""

    def __init__(self, status_code: int, url: str, reason: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.reason = reason
        detail = f"bad status code: {status_code}"
        if reason:
            detail = f"{detail} {reason}"
        super().__init__(f"{detail} ({url})")


class ParseError(GatorError):
    """The feed document is malformed or has no recognizable root."""


class DuplicateEntryError(GatorError):
    """A post with the same URL already exists."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"post already exists: {url}")


class CommandError(GatorError):
    """A command could not be completed; reported to the operator."""


class NotLoggedInError(CommandError):
    def __init__(self) -> None:
        super().__init__(
            "user is not logged in. Please run 'gator login <username>' first"
        )


class NotFoundError(CommandError):
    """A looked-up user or feed does not exist."""


class ConflictError(CommandError):
    """A uniqueness rule would be violated."""
