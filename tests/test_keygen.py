import pytest
from keybench.errors import NonInvertibleExponent, RandomSourceExhausted
from keybench.keygen import KeyGenerator
from keybench.randsrc import RandomSource, ReplayRandomSource, SeededRandomSource
from tests.helpers import NoInverseEngine, assert_valid_pair


@pytest.mark.parametrize("e", [3, 17, 65537])
def test_generated_pairs_hold_invariants(generator, e):
    for _ in range(3):
        assert_valid_pair(generator.generate(256, e))


def test_primes_are_half_the_modulus(generator):
    pair = generator.generate(256, 65537)
    assert pair.private.p.bit_length() == 128
    assert pair.private.q.bit_length() == 128
    assert pair.private.bits == 256


def test_public_key_matches_private(generator):
    pair = generator.generate(128, 3)
    assert pair.private.public_key() == pair.public


def test_same_seed_same_keys():
    a = KeyGenerator(SeededRandomSource(seed=7)).generate(256, 65537)
    b = KeyGenerator(SeededRandomSource(seed=7)).generate(256, 65537)
    assert a == b


def test_replayed_stream_is_deterministic():
    stream = bytes(range(1, 9))
    a = KeyGenerator(ReplayRandomSource(stream)).generate(64, 3)
    b = KeyGenerator(ReplayRandomSource(stream)).generate(64, 3)
    assert a == b


def test_equal_draw_forces_q_redraw():
    block_a = b"\x00\x00\x00\x00"  # -> 0xc0000001
    block_b = b"\x10\x00\x00\x00"  # -> 0xd0000001
    source = ReplayRandomSource(block_a + block_a + block_b)
    pair = KeyGenerator(source).generate(64, 65537)

    assert_valid_pair(pair)
    assert 0xC0000001 <= pair.private.p < 0xD0000001
    assert pair.private.q >= 0xD0000001
    assert source.remaining == 0


def test_short_stream_raises_exhausted():
    source = ReplayRandomSource(b"\x00\x00\x00\x00")
    with pytest.raises(RandomSourceExhausted) as info:
        KeyGenerator(source).generate(64, 65537)
    assert info.value.requested == 4
    assert info.value.received == 0


def test_failing_source_raises_exhausted():
    class Broken(RandomSource):
        def read(self, n):
            raise OSError("no entropy")

    with pytest.raises(RandomSourceExhausted) as info:
        KeyGenerator(Broken()).generate(64, 65537)
    assert isinstance(info.value.__cause__, OSError)


def test_uninvertible_exponent_is_reported(seeded):
    gen = KeyGenerator(seeded, engine=NoInverseEngine())
    with pytest.raises(NonInvertibleExponent) as info:
        gen.generate(128, 65537)
    assert info.value.exponent == 65537
    assert info.value.gcd == 1


@pytest.mark.parametrize("bits,e", [(1000, 65537), (16, 65537), (0, 3), (128, 4), (128, 1), (128, -3), (128, 9), (128, 15)])
def test_bad_parameters_rejected_before_drawing(bits, e):
    source = ReplayRandomSource(b"\x00" * 64)
    with pytest.raises(ValueError):
        KeyGenerator(source).generate(bits, e)
    assert source.remaining == 64
