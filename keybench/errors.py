# keybench/errors.py
"""
Typed failures raised by the key generator and the batch harness.

GenerationError covers a single key-pair attempt; BatchError wraps one of
those with its position in a batch. Nothing here is retried internally.
"""
from __future__ import annotations


class KeybenchError(Exception):
    pass


class GenerationError(KeybenchError):
    """A single key-pair generation failed."""


class NonInvertibleExponent(GenerationError):
    def __init__(self, exponent: int, gcd: int):
        self.exponent = exponent
        self.gcd = gcd
        super().__init__(f"public exponent {exponent} is not invertible mod phi: gcd(e, phi) = {gcd:x}")


class RandomSourceExhausted(GenerationError):
    def __init__(self, requested: int, received: int):
        self.requested = requested
        self.received = received
        super().__init__(f"random source supplied {received} of {requested} requested bytes")


class BatchError(KeybenchError):
    pass


class IterationFailed(BatchError):
    def __init__(self, index: int, cause: GenerationError, completed: int):
        self.index = index
        self.cause = cause
        self.completed = completed
        super().__init__(f"iteration {index} failed after {completed} completed: {cause}")
