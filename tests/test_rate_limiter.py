import threading
import time

import pytest

from wgetlite.errors import WaitCancelled
from wgetlite.rate_limiter import RateLimiter

def test_rate_limiter_basic_throughput():
    # A limiter at 5 tokens/sec allows a burst up to capacity (5), then paces.
    rl = RateLimiter(rate=5.0)
    start = time.perf_counter()

    # Consume 10 tokens. The first ~5 are immediate (capacity), the rest are paced.
    for _ in range(10):
        rl.acquire()

    elapsed = time.perf_counter() - start
    # Expect at least ~1 second of pacing (we allow tolerance for timing variance).
    assert elapsed >= 0.9

def test_burst_is_immediate():
    rl = RateLimiter(rate=1000)
    start = time.perf_counter()
    rl.acquire(1000)
    assert time.perf_counter() - start < 0.5

def test_request_is_granted_whole():
    # 100 tokens/s, bucket emptied: 50 tokens need ~0.5s, granted in one piece
    rl = RateLimiter(rate=100)
    rl.acquire(100)
    start = time.perf_counter()
    rl.acquire(50)
    elapsed = time.perf_counter() - start
    assert elapsed >= 0.45
    assert rl.available < 10

def test_tokens_never_exceed_capacity():
    rl = RateLimiter(rate=1000, capacity=10)
    time.sleep(0.05)
    assert rl.available <= 10

def test_oversized_request_waits_for_the_rest():
    rl = RateLimiter(rate=100)
    start = time.perf_counter()
    rl.acquire(150)  # 100 from the full bucket, 50 more take ~0.5s
    assert time.perf_counter() - start >= 0.45
    assert rl.available < 10

def test_cancelled_wait_gives_tokens_back():
    rl = RateLimiter(rate=10)
    cancel = threading.Event()
    threading.Timer(0.05, cancel.set).start()
    with pytest.raises(WaitCancelled):
        rl.acquire(30, cancel=cancel)
    # The 10 tokens the bucket started with were not spent
    assert rl.available >= 10

def test_cancelled_wait():
    rl = RateLimiter(rate=10)
    rl.acquire(10)
    cancel = threading.Event()
    threading.Timer(0.1, cancel.set).start()
    start = time.perf_counter()
    with pytest.raises(WaitCancelled):
        rl.acquire(10, cancel=cancel)  # would take ~1s without the cancel
    assert time.perf_counter() - start < 0.9

def test_already_cancelled():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(WaitCancelled):
        RateLimiter(rate=10).acquire(1, cancel=cancel)

@pytest.mark.parametrize("rate", [0, -1])
def test_rate_must_be_positive(rate):
    with pytest.raises(ValueError):
        RateLimiter(rate=rate)
