# keybench/engine.py
"""
Big-integer engine used by the key generator.

Values are plain Python ints; the primality test, inverse and gcd come from
pycryptodome's Crypto.Util.number. Subclass NumberEngine to substitute any
of the operations (tests do this to force an uninvertible exponent).
"""
from __future__ import annotations
from typing import Callable, Optional
from Crypto.Util.number import GCD, bytes_to_long, inverse, isPrime

BYTE_ORDERS = ("big", "little")


class NumberEngine:
    def __init__(self, false_positive_prob: float = 1e-6, randfunc: Optional[Callable[[int], bytes]] = None):
        self.false_positive_prob = false_positive_prob
        self.randfunc = randfunc

    def from_bytes(self, buf: bytes, byteorder: str = "big") -> int:
        if byteorder not in BYTE_ORDERS:
            raise ValueError(f"Invalid byte order: {byteorder}")
        if byteorder == "little":
            buf = buf[::-1]
        return bytes_to_long(buf)

    def is_probable_prime(self, n: int) -> bool:
        return bool(isPrime(n, false_positive_prob=self.false_positive_prob, randfunc=self.randfunc))

    def next_prime(self, n: int) -> int:
        """Smallest probable prime strictly greater than n."""
        if n < 2:
            return 2
        candidate = n + 1
        if candidate % 2 == 0:
            candidate += 1
        while not self.is_probable_prime(candidate):
            candidate += 2
        return candidate

    def inverse(self, a: int, m: int) -> Optional[int]:
        # None when gcd(a, m) != 1
        if GCD(a, m) != 1:
            return None
        return inverse(a, m)

    def gcd(self, a: int, b: int) -> int:
        return GCD(a, b)
