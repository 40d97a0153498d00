from __future__ import annotations
import threading
import time
from typing import Optional

from .errors import WaitCancelled


class RateLimiter:
    """
    A **token-bucket** rate limiter counted in bytes.

    - "rate" means tokens per second (bytes per second when throttling a download).
    - "capacity" is the max number of tokens the bucket can hold (controls burst size).
    - Every call to acquire(n) takes n tokens at once. Requests are never split:
      the whole amount is reserved, and if the bucket goes below zero we wait
      until the refill has paid it back.
    - The bucket starts full, so the first `capacity` tokens are granted immediately.

    A request bigger than the whole bucket works the same way: it simply waits
    longer, so the average rate holds whatever chunk size the caller uses.

    Usage:
    - Use after reading a chunk: the chunk is only released once it is paid for.
    - Pass a threading.Event as `cancel` to be able to abort a long wait.

    Threading context:
    - One limiter per download, used by a single thread. There is no lock.

    Example:
        limiter = RateLimiter(rate=300 * 1024)  # 300 KiB/s, 300 KiB burst

        chunk = resp.read(64 * 1024)
        limiter.acquire(len(chunk))
        f.write(chunk)
    """

    def __init__(self, rate: float, capacity: Optional[float] = None):
        if rate <= 0:
            raise ValueError("rate must be > 0 (tokens per second)")
        self.rate = float(rate)

        # If capacity is not given, use 'rate' so we can burst up to one second worth of tokens
        self.capacity = float(capacity if capacity is not None else rate)
        if self.capacity <= 0:
            raise ValueError("capacity must be > 0")

        # Start with a full bucket (burst allowed immediately)
        self._tokens = self.capacity
        self._last = time.perf_counter()

    def _refill(self) -> None:
        """Refill tokens based on how much time has passed since last check."""
        now = time.perf_counter()
        elapsed = now - self._last
        if elapsed <= 0:
            return

        self._last = now
        # Add tokens proportional to elapsed time, but cap at capacity
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)

    @property
    def available(self) -> float:
        """Tokens currently in the bucket (negative while a reserved request is still waiting)."""
        self._refill()
        return self._tokens

    def acquire(self, n: float = 1, cancel: Optional[threading.Event] = None) -> None:
        """
        Block until n tokens have been paid for, then return.

        The whole request is reserved up front (the bucket may go negative),
        then we sleep until the refill has covered the deficit. The request is
        never split, and a request bigger than the capacity works the same way.

        Raises WaitCancelled if `cancel` is set while waiting; the reserved
        tokens are given back in that case.
        """
        if n <= 0:
            return
        if cancel is not None and cancel.is_set():
            raise WaitCancelled(f"wait for {n:g} tokens was cancelled")

        self._refill()
        self._tokens -= n
        if self._tokens >= 0:
            return

        # If you owe 100 KiB at 300 KiB/s, that is ~0.33s
        wait_s = -self._tokens / self.rate
        if cancel is None:
            time.sleep(wait_s)
        elif cancel.wait(timeout=wait_s):
            self._tokens += n
            raise WaitCancelled(f"wait for {n:g} tokens was cancelled")
