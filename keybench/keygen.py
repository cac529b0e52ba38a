# keybench/keygen.py
"""
Textbook RSA key generation.

Rather than picking e after the primes, e is fixed first and p, q are chosen
so that gcd(e, p-1) = gcd(e, q-1) = 1:

- draw modulus_bits/16 bytes, set the two top bits of the first byte and the
  low bit of the last, read the buffer big-endian
- advance to the next probable prime, then keep advancing while p % e == 1
- q is drawn the same way, from scratch, until it differs from p
- d = e^-1 mod (p-1)(q-1)

No hardening of any kind. Hand in a SystemRandomSource if the keys matter.
"""
from __future__ import annotations
from typing import Optional
from Crypto.Util.number import isPrime
from .engine import NumberEngine
from .errors import NonInvertibleExponent, RandomSourceExhausted
from .randsrc import RandomSource, SeededRandomSource
from .storage import KeyPair, PrivateKey, PublicKey
from .utils import LOG

DEFAULT_MODULUS_BITS = 1024
DEFAULT_PUBLIC_EXPONENT = 65537
MIN_MODULUS_BITS = 32

TOP_BITS = 0xC0
LOW_BIT = 0x01


def check_params(modulus_bits: int, public_exponent: int):
    if modulus_bits < MIN_MODULUS_BITS or modulus_bits % 16 != 0:
        raise ValueError(f"modulus_bits must be a multiple of 16 and >= {MIN_MODULUS_BITS}, got {modulus_bits}")
    # p % e != 1 only rules out gcd(e, p-1) > 1 when e is prime
    if public_exponent < 3 or not isPrime(public_exponent):
        raise ValueError(f"public_exponent must be a prime >= 3, got {public_exponent}")


class KeyGenerator:
    def __init__(self, random_source: Optional[RandomSource] = None, engine: Optional[NumberEngine] = None):
        self.random_source = random_source if random_source is not None else SeededRandomSource()
        self.engine = engine if engine is not None else NumberEngine()

    def generate(self, modulus_bits: int = DEFAULT_MODULUS_BITS, public_exponent: int = DEFAULT_PUBLIC_EXPONENT) -> KeyPair:
        check_params(modulus_bits, public_exponent)
        e = public_exponent
        nbytes = modulus_bits // 16

        p = self._select_prime(nbytes, e)
        while True:
            q = self._select_prime(nbytes, e)
            if q != p:
                break
            LOG.debug("q collided with p, drawing again")

        n = p * q
        phi = (p - 1) * (q - 1)

        d = self.engine.inverse(e, phi)
        if d is None:
            raise NonInvertibleExponent(e, self.engine.gcd(e, phi))

        return KeyPair(
            public=PublicKey(modulus=n, exponent=e),
            private=PrivateKey(modulus=n, exponent=e, private_exponent=d, p=p, q=q),
        )

    def _draw_candidate(self, nbytes: int) -> int:
        try:
            raw = self.random_source.read(nbytes)
        except OSError as exc:
            raise RandomSourceExhausted(nbytes, 0) from exc
        if len(raw) < nbytes:
            raise RandomSourceExhausted(nbytes, len(raw))
        buf = bytearray(raw)
        buf[0] |= TOP_BITS
        buf[-1] |= LOW_BIT
        return self.engine.from_bytes(bytes(buf), "big")

    def _select_prime(self, nbytes: int, e: int) -> int:
        candidate = self._draw_candidate(nbytes)
        prime = self.engine.next_prime(candidate - 1)
        while prime % e == 1:
            prime = self.engine.next_prime(prime)
        return prime
