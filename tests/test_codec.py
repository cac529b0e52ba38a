import pytest
from keybench import codec
from keybench.errors import NonInvertibleExponent
from keybench.harness import run_batch


@pytest.fixture
def result(generator):
    return run_batch(3, 128, 65537, generator=generator)


def test_report_hides_private_exponent_by_default(result):
    report = codec.batch_report(result)
    assert report.count == 3
    assert report.modulus_bits == 128
    assert report.public_exponent == 65537
    assert all(rec.d is None for rec in report.keys)
    first = result.pairs[0].private
    assert report.keys[0].n == format(first.modulus, "x")
    assert report.keys[0].p == format(first.p, "x")
    assert report.keys[0].q == format(first.q, "x")
    assert report.keys[0].e == "10001"


def test_report_with_private_exponent(result):
    report = codec.batch_report(result, include_private=True)
    for rec, pair in zip(report.keys, result.pairs):
        assert int(rec.d, 16) == pair.private.private_exponent


def test_report_survives_json(result):
    report = codec.batch_report(result, include_private=True)
    data = codec.encode(report)
    assert data.startswith(b"{")
    assert codec.decode(data) == report


def test_report_lists_failures(result):
    result.add_failure(7, NonInvertibleExponent(3, 3))
    report = codec.batch_report(result)
    assert report.failures[0].index == 7
    assert report.failures[0].error == "NonInvertibleExponent"


def test_hex_dump_layout(result):
    text = codec.hex_dump(result)
    lines = text.splitlines()
    assert lines[0].startswith("Time taken to generate 3 RSA keys:")
    assert "Key Pair 1:" in lines
    assert "Key Pair 3:" in lines
    assert f"Public Key (n): 0x{result.pairs[0].public.modulus:x}" in lines
    assert "Private Key (d)" not in text


def test_hex_dump_with_private_exponent(result):
    text = codec.hex_dump(result, include_private=True)
    assert f"Private Key (d): 0x{result.pairs[2].private.private_exponent:x}" in text


def test_to_hex_is_lowercase_unpadded():
    assert codec.to_hex(255) == "ff"
    assert codec.to_hex(0x0abc) == "abc"
