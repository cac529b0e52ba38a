# keybench/harness.py
"""
Batch harness: generate `count` key pairs and time each one.

Default policy is abort-on-failure; the first GenerationError is re-raised as
IterationFailed with its index. continue_on_error=True records failures on
the result instead.

workers > 1 fans the iterations out over a thread pool. Positions in the
result follow the iteration index, not completion order.
"""
from __future__ import annotations
import copy
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Tuple
from .errors import GenerationError, IterationFailed
from .keygen import DEFAULT_MODULUS_BITS, DEFAULT_PUBLIC_EXPONENT, KeyGenerator, check_params
from .randsrc import LockedRandomSource, RandomSource
from .storage import BatchResult, KeyPair
from .utils import LOG

Clock = Callable[[], float]


def _timed(generator: KeyGenerator, modulus_bits: int, public_exponent: int, clock: Clock) -> Tuple[KeyPair, float]:
    start = clock()
    pair = generator.generate(modulus_bits, public_exponent)
    end = clock()
    return pair, end - start


def run_batch(
    count: int,
    modulus_bits: int = DEFAULT_MODULUS_BITS,
    public_exponent: int = DEFAULT_PUBLIC_EXPONENT,
    *,
    generator: Optional[KeyGenerator] = None,
    random_source: Optional[RandomSource] = None,
    workers: int = 1,
    continue_on_error: bool = False,
    clock: Clock = time.perf_counter,
    log_every: int = 100,
) -> BatchResult:
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    check_params(modulus_bits, public_exponent)

    if generator is not None and random_source is not None:
        raise ValueError("pass either generator or random_source, not both")
    if generator is None:
        generator = KeyGenerator(random_source=random_source)

    result = BatchResult(modulus_bits=modulus_bits, public_exponent=public_exponent)
    LOG.info("Generating %d RSA-%d keys (e=%d, workers=%d)", count, modulus_bits, public_exponent, workers)

    batch_start = clock()
    if workers == 1:
        _run_sequential(result, generator, count, clock, continue_on_error, log_every)
    else:
        _run_pooled(result, generator, count, clock, continue_on_error, workers)
    result.total_elapsed = clock() - batch_start

    LOG.info("Generated %d keys in %.2fs (mean %.4fs)", result.count, result.total_elapsed, result.mean_elapsed)
    if result.failures:
        LOG.warning("%d iterations failed", len(result.failures))
    return result


def _run_sequential(result: BatchResult, generator: KeyGenerator, count: int, clock: Clock,
                    continue_on_error: bool, log_every: int):
    for index in range(count):
        try:
            pair, elapsed = _timed(generator, result.modulus_bits, result.public_exponent, clock)
        except GenerationError as exc:
            if not continue_on_error:
                LOG.error("Iteration %d failed after %d completed: %s", index, result.count, exc)
                raise IterationFailed(index, exc, result.count) from exc
            LOG.warning("Iteration %d failed, continuing: %s", index, exc)
            result.add_failure(index, exc)
            continue
        result.add(pair, elapsed)
        if log_every and (index + 1) % log_every == 0:
            LOG.debug("%d/%d keys generated", index + 1, count)


def _run_pooled(result: BatchResult, generator: KeyGenerator, count: int, clock: Clock,
                continue_on_error: bool, workers: int):
    if not isinstance(generator.random_source, LockedRandomSource):
        generator = copy.copy(generator)
        generator.random_source = LockedRandomSource(generator.random_source)

    slots: List[Optional[Tuple[KeyPair, float]]] = [None] * count
    failures: List[Tuple[int, GenerationError]] = []
    completed = 0

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures: Dict[Future, int] = {
            pool.submit(_timed, generator, result.modulus_bits, result.public_exponent, clock): index
            for index in range(count)
        }
        for fut in as_completed(futures):
            index = futures[fut]
            try:
                slots[index] = fut.result()
            except GenerationError as exc:
                if not continue_on_error:
                    for other in futures:
                        other.cancel()
                    LOG.error("Iteration %d failed after %d completed: %s", index, completed, exc)
                    raise IterationFailed(index, exc, completed) from exc
                LOG.warning("Iteration %d failed, continuing: %s", index, exc)
                failures.append((index, exc))
                continue
            completed += 1

    for slot in slots:
        if slot is not None:
            result.add(*slot)
    for index, exc in sorted(failures, key=lambda f: f[0]):
        result.add_failure(index, exc)
