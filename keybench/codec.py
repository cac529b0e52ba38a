# keybench/codec.py
import msgspec, time
from .storage import BatchResult, KeyPair

REPORT_VERSION = 1


class KeyRecord(msgspec.Struct):
    index: int
    n: str
    e: str
    p: str
    q: str
    d: str | None = None


class FailureRecord(msgspec.Struct):
    index: int
    error: str
    detail: str


class BatchReport(msgspec.Struct):
    ver: int
    ts: int
    count: int
    modulus_bits: int
    public_exponent: int
    total_elapsed: float
    elapsed: list[float]
    keys: list[KeyRecord]
    failures: list[FailureRecord] = msgspec.field(default_factory=list)


def to_hex(value: int) -> str:
    return format(value, "x")


def key_record(index: int, pair: KeyPair, include_private: bool = False) -> KeyRecord:
    priv = pair.private
    return KeyRecord(
        index=index,
        n=to_hex(pair.public.modulus),
        e=to_hex(pair.public.exponent),
        p=to_hex(priv.p),
        q=to_hex(priv.q),
        d=to_hex(priv.private_exponent) if include_private else None,
    )


def batch_report(result: BatchResult, include_private: bool = False) -> BatchReport:
    return BatchReport(
        ver=REPORT_VERSION,
        ts=int(time.time()),
        count=result.count,
        modulus_bits=result.modulus_bits,
        public_exponent=result.public_exponent,
        total_elapsed=result.total_elapsed,
        elapsed=list(result.elapsed),
        keys=[key_record(i, pair, include_private) for i, pair in enumerate(result.pairs)],
        failures=[FailureRecord(index=i, error=type(exc).__name__, detail=str(exc)) for i, exc in result.failures],
    )


def encode(report: BatchReport) -> bytes:
    return msgspec.json.encode(report)


def decode(data: bytes) -> BatchReport:
    return msgspec.json.decode(data, type=BatchReport)


def hex_dump(result: BatchResult, include_private: bool = False) -> str:
    lines = [f"Time taken to generate {result.count} RSA keys: {result.total_elapsed:.2f} seconds", ""]
    for i, pair in enumerate(result.pairs):
        rec = key_record(i, pair, include_private)
        lines.append(f"Key Pair {i + 1}:")
        lines.append(f"Public Key (n): 0x{rec.n}")
        lines.append(f"Private Key (p): 0x{rec.p}")
        lines.append(f"Private Key (q): 0x{rec.q}")
        if rec.d is not None:
            lines.append(f"Private Key (d): 0x{rec.d}")
        lines.append("")
    return "\n".join(lines)
