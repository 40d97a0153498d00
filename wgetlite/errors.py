"""
Every failure the downloader can report, grouped by the stage it happened in:

  rate-limit label -> InvalidRateLimit   (before any network activity)
  HTTP request     -> SourceUnavailable
  output file      -> SinkUnavailable
  copy loop        -> TransferFailed     (read, write, or cancelled wait)

The CLI catches WgetliteError, prints the message and exits with status 1.
"""
from __future__ import annotations


class WgetliteError(Exception):
    """Base class for all errors raised by wgetlite."""


class InvalidRateLimit(WgetliteError, ValueError):
    """The --rate-limit label is not one of the supported tiers."""


class SourceUnavailable(WgetliteError):
    """The HTTP request could not be made or did not return 200 OK."""


class SinkUnavailable(WgetliteError):
    """The output file could not be created."""


class TransferFailed(WgetliteError):
    """Copying the response body to the output file stopped partway."""


class WaitCancelled(WgetliteError):
    """A token-bucket wait was aborted through its cancellation event."""
