# keybench/storage.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
from .errors import GenerationError


@dataclass(frozen=True)
class PublicKey:
    modulus: int
    exponent: int


@dataclass(frozen=True)
class PrivateKey:
    modulus: int
    exponent: int
    private_exponent: int
    p: int
    q: int

    @property
    def bits(self) -> int:
        return self.modulus.bit_length()

    # CRT values, only needed when exporting to a standard key format
    @property
    def dp(self) -> int:
        return self.private_exponent % (self.p - 1)

    @property
    def dq(self) -> int:
        return self.private_exponent % (self.q - 1)

    @property
    def qinv(self) -> int:
        return pow(self.q, -1, self.p)

    def public_key(self) -> PublicKey:
        return PublicKey(modulus=self.modulus, exponent=self.exponent)


@dataclass(frozen=True)
class KeyPair:
    public: PublicKey
    private: PrivateKey


@dataclass
class BatchResult:
    modulus_bits: int
    public_exponent: int
    pairs: List[KeyPair] = field(default_factory=list)
    elapsed: List[float] = field(default_factory=list)
    total_elapsed: float = 0.0
    failures: List[Tuple[int, GenerationError]] = field(default_factory=list)

    def add(self, pair: KeyPair, elapsed: float):
        self.pairs.append(pair)
        self.elapsed.append(elapsed)

    def add_failure(self, index: int, error: GenerationError):
        self.failures.append((index, error))

    @property
    def count(self) -> int:
        return len(self.pairs)

    @property
    def generation_time(self) -> float:
        """Sum of per-iteration durations, excluding harness overhead."""
        return sum(self.elapsed)

    @property
    def mean_elapsed(self) -> float:
        if not self.elapsed:
            return 0.0
        return self.generation_time / len(self.elapsed)
