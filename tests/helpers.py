from Crypto.Util.number import GCD, isPrime
from keybench.engine import NumberEngine


class NoInverseEngine(NumberEngine):
    def inverse(self, a, m):
        return None


class FlakyEngine(NumberEngine):
    """Fails the inverse on the listed (1-based) calls."""

    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = set(fail_on)
        self.calls = 0

    def inverse(self, a, m):
        self.calls += 1
        if self.calls in self.fail_on:
            return None
        return super().inverse(a, m)


def assert_valid_pair(pair):
    pub, priv = pair.public, pair.private
    p, q, e, d = priv.p, priv.q, priv.exponent, priv.private_exponent
    assert pub.modulus == priv.modulus == p * q
    assert pub.exponent == e
    assert p != q
    assert isPrime(p) and isPrime(q)
    assert GCD(e, p - 1) == 1
    assert GCD(e, q - 1) == 1
    assert (d * e) % ((p - 1) * (q - 1)) == 1
