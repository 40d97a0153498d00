from __future__ import annotations
import threading
import time
from dataclasses import dataclass
from http.client import HTTPException
from pathlib import Path
from typing import Optional

# We use Python's standard library HTTP client:
from urllib.request import Request, urlopen
from urllib.error import URLError, HTTPError

# HTTPError -> server responded with error code
# URLError  -> network-level failures (DNS, TLS, etc.)

from . import __version__
from .config import DownloadConfig
from .errors import SinkUnavailable, SourceUnavailable, TransferFailed
from .throttle import copy_stream


@dataclass
class Result:
    """
    Represents a finished download.
    - url:      which URL we fetched
    - path:     where the file was saved
    - status:   HTTP status code (always 200 here, anything else is an error)
    - size:     how many bytes were written
    - elapsed:  wall-clock seconds from request to last byte
    """
    url: str
    path: Path
    status: int
    size: int
    elapsed: float

    @property
    def rate(self) -> float:
        """Average bytes per second over the whole download."""
        return self.size / self.elapsed if self.elapsed > 0 else float(self.size)


class Downloader:
    """
    Fetches one URL into one file:
      1) GET the URL (with a User-Agent and an optional socket timeout)
      2) create/truncate the output file
      3) stream the body into it, throttled when rate_limit > 0

    Each stage fails with its own error (SourceUnavailable, SinkUnavailable,
    TransferFailed). Nothing is retried.
    """

    def __init__(
        self,
        rate_limit: int = 0,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        verbose: bool = False,
    ):
        if rate_limit < 0:
            raise ValueError("rate_limit must be >= 0 (bytes per second, 0 = unlimited)")
        self.rate_limit = rate_limit
        self.timeout = timeout
        self.user_agent = user_agent or f"wgetlite/{__version__}"
        # Identifies the app, helps avoid blocks, and is required by many servers
        self.verbose = verbose

    @classmethod
    def from_config(cls, config: DownloadConfig) -> "Downloader":
        return cls(
            rate_limit=config.rate_limit,
            timeout=config.timeout,
            user_agent=config.user_agent,
            verbose=config.verbose,
        )

    def _log(self, msg: str):
        """Print only if verbose mode is on."""
        if self.verbose:
            print(msg, flush=True)

    def _open(self, url: str):
        self._log(f"GET {url}")
        try:
            req = Request(url, headers={"User-Agent": self.user_agent}, method="GET")
            # urlopen raises HTTPError on 4xx/5xx; `timeout` applies to the socket operations.
            if self.timeout is None:
                return urlopen(req)
            return urlopen(req, timeout=self.timeout)
        except HTTPError as e:
            e.close()
            raise SourceUnavailable(f"HTTP request failed: {e.code} {e.reason}") from e
        except URLError as e:
            raise SourceUnavailable(f"failed to create request: {e.reason}") from e
        except (HTTPException, OSError, ValueError) as e:
            # ValueError: malformed URL (e.g. missing scheme)
            raise SourceUnavailable(f"failed to create request: {e}") from e

    def download(self, url: str, output_path: Path, cancel: Optional[threading.Event] = None) -> Result:
        """
        Download `url` into `output_path`.

        `cancel` is handed to the token-bucket wait, so setting it from elsewhere
        aborts a throttled transfer with TransferFailed.
        """
        output_path = Path(output_path)
        start = time.perf_counter()

        with self._open(url) as resp:
            # Some Python versions expose status on resp; otherwise assume 200
            status = getattr(resp, "status", 200)
            self._log(f"HTTP {status} {url}")
            if status != 200:
                raise SourceUnavailable(f"HTTP request failed: {status} {getattr(resp, 'reason', '')}".rstrip())

            # The body is not touched until the file exists
            try:
                f = open(output_path, "wb")
            except OSError as e:
                raise SinkUnavailable(f"failed to create file {output_path}: {e}") from e

            if self.rate_limit:
                self._log(f"rate limit {self.rate_limit} bytes/s")
            try:
                with f:
                    size = copy_stream(resp, f, limit=self.rate_limit, cancel=cancel)
            except OSError as e:
                # close() can still hit a full disk after the last flush
                raise TransferFailed(f"download failed: {e}") from e

        result = Result(url=url, path=output_path, status=status, size=size, elapsed=time.perf_counter() - start)
        self._log(f"wrote {size} bytes to {output_path} in {result.elapsed:.2f}s ({result.rate:.0f} bytes/s)")
        return result
