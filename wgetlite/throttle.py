from __future__ import annotations
import threading
from typing import BinaryIO, Optional

from .errors import TransferFailed
from .rate_limiter import RateLimiter

# Read this much per iteration of the copy loop.
CHUNK_SIZE = 64 * 1024  # 64 KB


class ThrottledReader:
    """
    Wraps a readable byte stream so that bytes come out no faster than the limiter allows.

    The read itself is not made smaller: we read whatever the inner stream gives us,
    then wait until the limiter has granted one token per byte before handing the
    chunk back. With a bucket that starts full, the first `capacity` bytes pass at
    full speed (the burst) and everything after that is paced.

    Holds the stream and the limiter; it does not subclass any io type.
    """

    def __init__(self, source: BinaryIO, limiter: RateLimiter, cancel: Optional[threading.Event] = None):
        self.source = source
        self.limiter = limiter
        self.cancel = cancel

    def read(self, size: int = -1) -> bytes:
        chunk = self.source.read(size)
        if chunk:
            self.limiter.acquire(len(chunk), cancel=self.cancel)
        return chunk


def copy_stream(
    source: BinaryIO,
    sink: BinaryIO,
    limit: int = 0,
    chunk_size: int = CHUNK_SIZE,
    cancel: Optional[threading.Event] = None,
) -> int:
    """
    Copy everything from `source` to `sink`, returning the number of bytes written.

    - limit == 0: plain streaming copy in `chunk_size` pieces.
    - limit  > 0: reads go through a ThrottledReader backed by a fresh, full
                  token bucket (capacity = rate = limit bytes/sec).

    Any failure while reading, writing, or waiting for tokens raises TransferFailed.
    Nothing is written after the failing read, but what was already written stays
    in the sink (a partial file may remain).
    """
    if limit < 0:
        raise ValueError("limit must be >= 0 (bytes per second, 0 = unlimited)")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    reader = source
    if limit > 0:
        # Each download gets its own bucket
        reader = ThrottledReader(source, RateLimiter(rate=limit, capacity=limit), cancel=cancel)

    written = 0
    try:
        while True:
            chunk = reader.read(chunk_size)
            if not chunk:
                break
            sink.write(chunk)
            written += len(chunk)
        # Buffered sinks can still fail on the last bytes
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()
    except Exception as e:
        raise TransferFailed(f"download failed after {written} bytes: {type(e).__name__}: {e}") from e
    return written
