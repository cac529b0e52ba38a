# keybench/randsrc.py
"""
Randomness sources handed to the key generator.

Every source exposes read(n) -> bytes. A source may return fewer than n
bytes when it has nothing left; the generator treats that as exhaustion.
"""
from __future__ import annotations
import random
import threading
import time
from typing import Optional
from Crypto.Random import get_random_bytes


class RandomSource:
    def read(self, n: int) -> bytes:
        raise NotImplementedError


class SeededRandomSource(RandomSource):
    """Non-cryptographic PRNG, seeded once. Good enough for benchmarking."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = time.time_ns() if seed is None else seed
        self._rng = random.Random(self.seed)

    def read(self, n: int) -> bytes:
        return self._rng.randbytes(n)


class SystemRandomSource(RandomSource):
    def read(self, n: int) -> bytes:
        return get_random_bytes(n)


class ReplayRandomSource(RandomSource):
    """Hands out a fixed byte stream in order, then runs dry."""

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read(self, n: int) -> bytes:
        chunk = self._data[self._pos:self._pos + n]
        self._pos += len(chunk)
        return chunk


class LockedRandomSource(RandomSource):
    def __init__(self, inner: RandomSource):
        self.inner = inner
        self._lock = threading.Lock()

    def read(self, n: int) -> bytes:
        with self._lock:
            return self.inner.read(n)
