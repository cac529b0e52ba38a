import argparse, json, sys
from typing import Any, Dict, List, Optional
from . import codec
from .crypto import write_pems
from .errors import IterationFailed
from .harness import run_batch
from .keygen import KeyGenerator
from .randsrc import SeededRandomSource, SystemRandomSource
from .utils import LOG, set_verbose, write_file_bytes, write_file_text

# the two historical configurations
VARIANTS = {
    "classic": {"bits": 1024, "exponent": 3},
    "modern": {"bits": 2048, "exponent": 65537},
}

DEFAULTS: Dict[str, Any] = {
    "count": 1000,
    "bits": 1024,
    "exponent": 65537,
    "seed": None,
    "workers": 1,
    "secure_random": False,
    "report": None,
    "hex_out": None,
    "pem_dir": None,
    "include_private": False,
    "continue_on_error": False,
    "print_keys": False,
}


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(prog="keybench", description="Generate textbook RSA keys in bulk and time it")
    ap.add_argument('--config', type=str, help='JSON config file')
    ap.add_argument('--variant', choices=sorted(VARIANTS), help='preset modulus size and exponent')
    ap.add_argument('--count', type=int, help='number of key pairs')
    ap.add_argument('--bits', type=int, help='modulus size in bits (multiple of 16)')
    ap.add_argument('--exponent', type=int, help='public exponent e')
    ap.add_argument('--seed', type=int, help='seed for the benchmark PRNG')
    ap.add_argument('--workers', type=int, help='thread pool size')
    ap.add_argument('--secure-random', dest='secure_random', action='store_true', default=None,
                    help='draw from the OS CSPRNG instead of the seeded PRNG')
    ap.add_argument('--report', type=str, help='write a JSON report here')
    ap.add_argument('--hex-out', dest='hex_out', type=str, help='write a hex dump here')
    ap.add_argument('--pem-dir', dest='pem_dir', type=str, help='write PEM files into this directory')
    ap.add_argument('--include-private', dest='include_private', action='store_true', default=None,
                    help='include d in report and hex dump')
    ap.add_argument('--continue-on-error', dest='continue_on_error', action='store_true', default=None,
                    help='record failed iterations instead of aborting')
    ap.add_argument('--print-keys', dest='print_keys', action='store_true', default=None,
                    help='print the hex dump to stdout')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap, ap.parse_args(argv)


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        return json.load(f)


def resolve_settings(args, cfg: Dict[str, Any]) -> Dict[str, Any]:
    """defaults < variant < config file < command line"""
    settings = dict(DEFAULTS)
    variant = args.variant or cfg.get("variant")
    if variant:
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {variant}")
        settings.update(VARIANTS[variant])
    for key in DEFAULTS:
        if key in cfg:
            settings[key] = cfg[key]
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value
    return settings


def export(result, settings: Dict[str, Any]):
    include_private = settings["include_private"]
    if settings["report"]:
        write_file_bytes(settings["report"], codec.encode(codec.batch_report(result, include_private)))
        LOG.info("Report written to %s", settings["report"])
    if settings["hex_out"]:
        write_file_text(settings["hex_out"], codec.hex_dump(result, include_private))
        LOG.info("Hex dump written to %s", settings["hex_out"])
    if settings["pem_dir"]:
        write_pems(result, settings["pem_dir"])
    if settings["print_keys"]:
        print(codec.hex_dump(result, include_private))


def main(argv: Optional[List[str]] = None) -> int:
    ap, args = parse_args(argv)
    set_verbose(args.verbose)
    cfg = load_config(args.config) if args.config else {}
    try:
        settings = resolve_settings(args, cfg)
    except ValueError as e:
        ap.error(str(e))

    if settings["secure_random"]:
        source = SystemRandomSource()
    else:
        source = SeededRandomSource(settings["seed"])
        LOG.debug("PRNG seed: %d", source.seed)

    try:
        result = run_batch(
            settings["count"],
            settings["bits"],
            settings["exponent"],
            generator=KeyGenerator(random_source=source),
            workers=settings["workers"],
            continue_on_error=settings["continue_on_error"],
        )
    except ValueError as e:
        ap.error(str(e))
    except IterationFailed as e:
        LOG.error("Batch aborted: %d iterations succeeded before failure", e.completed)
        LOG.error("Cause: %s", e.cause)
        return 1

    print(f"Time taken to generate {result.count} RSA keys: {result.total_elapsed:.2f} seconds")
    export(result, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
