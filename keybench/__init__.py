"""Textbook RSA key generation and bulk timing harness."""
from .harness import run_batch
from .keygen import KeyGenerator
from .storage import BatchResult, KeyPair, PrivateKey, PublicKey

__version__ = "0.1.0"
