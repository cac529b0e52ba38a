# keybench/crypto.py
"""
Bridges from generated key material to the standard libraries.

- pycryptodome's RSA.construct does an independent consistency check
- cryptography serialises the pair to PEM (PKCS#8 / SubjectPublicKeyInfo)
"""
import os
from typing import List
from Crypto.PublicKey import RSA
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from .storage import BatchResult, KeyPair
from .utils import LOG, ensure_dir, write_file_bytes


def to_rsa_key(pair: KeyPair) -> RSA.RsaKey:
    priv = pair.private
    return RSA.construct((priv.modulus, priv.exponent, priv.private_exponent, priv.p, priv.q), consistency_check=True)


def is_consistent(pair: KeyPair) -> bool:
    try:
        to_rsa_key(pair)
        return True
    except ValueError:
        return False


def _private_key(pair: KeyPair) -> rsa.RSAPrivateKey:
    priv = pair.private
    numbers = rsa.RSAPrivateNumbers(
        p=priv.p,
        q=priv.q,
        d=priv.private_exponent,
        dmp1=priv.dp,
        dmq1=priv.dq,
        iqmp=priv.qinv,
        public_numbers=rsa.RSAPublicNumbers(e=priv.exponent, n=priv.modulus),
    )
    return numbers.private_key()


def private_pem(pair: KeyPair) -> bytes:
    return _private_key(pair).private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_pem(pair: KeyPair) -> bytes:
    pub = rsa.RSAPublicNumbers(e=pair.public.exponent, n=pair.public.modulus).public_key()
    return pub.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def write_pems(result: BatchResult, directory: str) -> List[str]:
    """Write key_<i>_priv.pem / key_<i>_pub.pem for every pair, return the paths."""
    ensure_dir(directory)
    paths = []
    for i, pair in enumerate(result.pairs):
        priv_path = os.path.join(directory, f"key_{i}_priv.pem")
        pub_path = os.path.join(directory, f"key_{i}_pub.pem")
        write_file_bytes(priv_path, private_pem(pair))
        write_file_bytes(pub_path, public_pem(pair))
        paths.extend([priv_path, pub_path])
    LOG.info("Wrote %d PEM files to %s", len(paths), directory)
    return paths
