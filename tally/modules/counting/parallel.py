"""
Parallel construction of Counters

Purpose
- Build a Counter from elements produced concurrently (e.g. tokenizing many lines on a thread pool)
- Counting stays single-threaded: workers only produce, the gathered output is drained into update()

Strategies
- collect: ThreadPoolExecutor.map gathers produced elements in input order, then one update() pass
- partition: each worker counts its own chunk into a private Counter; the partial Counters are merged
Both give identical counts regardless of worker interleaving, since counting is commutative.

produce / flatten
- produce maps one input item to one element (identity by default)
- flatten=True means produce returns an iterable of elements per item (str.split for word counts);
  the per-item iterables are chained before counting

Notes
- Worker exceptions are re-raised by the executor to the caller unchanged
- Pool size follows get_worker_count(): ~tasks_per_worker tasks per thread, capped by CPU count
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from itertools import chain
from typing import Any, Callable, Iterable, List, Optional, Sequence

from tally.modules.counting.counter import Counter

logger = logging.getLogger(__name__)

# Each thread should get enough work to be worth starting
TASKS_PER_WORKER = 100


def _identity(item: Any) -> Any:
    return item


def get_worker_count(num_tasks: int, tasks_per_worker: int = TASKS_PER_WORKER) -> int:
    """
    Number of threads for num_tasks: ceil(num_tasks / tasks_per_worker),
    never more than the CPU count and never less than 1.
    """
    cpu_count = os.cpu_count() or 4
    per_worker = max(1, int(tasks_per_worker))
    calculated = (int(num_tasks) + per_worker - 1) // per_worker
    return max(1, min(cpu_count, calculated))


def produced_elements(
    items: Iterable[Any],
    produce: Optional[Callable[[Any], Any]] = None,
    flatten: bool = False,
) -> Iterable[Any]:
    """Lazily apply produce to items; chain the per-item results when flatten is set."""
    produced = map(produce, items) if produce else items
    return chain.from_iterable(produced) if flatten else produced


def par_collect(
    items: Iterable[Any],
    produce: Optional[Callable[[Any], Any]] = None,
    max_workers: Optional[int] = None,
    flatten: bool = False,
) -> List[Any]:
    """
    Map produce over items on a thread pool and gather the results in input order.
    With flatten=True the per-item iterables are chained into one flat list.
    """
    items = list(items)
    if not items:
        return []
    produce = produce or _identity
    workers = max_workers or get_worker_count(len(items))
    logger.debug("par_collect: %d items on %d workers", len(items), workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = pool.map(produce, items)
        if flatten:
            return list(chain.from_iterable(results))
        return list(results)


def counter_from_parallel(
    items: Iterable[Any],
    produce: Optional[Callable[[Any], Any]] = None,
    max_workers: Optional[int] = None,
    flatten: bool = False,
) -> Counter:
    """Collect produced elements concurrently, then count them in a single update() pass."""
    collected = par_collect(items, produce=produce, max_workers=max_workers, flatten=flatten)
    counter = Counter()
    counter.update(collected)
    return counter


def merge_counters(counters: Iterable[Counter]) -> Counter:
    """
    Sum Counters into one accumulator, in place; inputs are left untouched.
    Same result as folding with +, without copying the accumulator per step.
    """
    merged = Counter()
    acc = merged.counts
    for counter in counters:
        for elem, c in counter.counts.items():
            if c > 0:
                acc[elem] = acc.get(elem, 0) + c
    return merged


def count_partitioned(
    chunks: Sequence[Iterable[Any]],
    produce: Optional[Callable[[Any], Any]] = None,
    max_workers: Optional[int] = None,
    flatten: bool = False,
) -> Counter:
    """
    Count every chunk into its own Counter on a thread pool and merge the results.
    No Counter is shared between threads.
    """
    chunks = list(chunks)
    if not chunks:
        return Counter()
    workers = max_workers or get_worker_count(len(chunks), tasks_per_worker=1)
    logger.debug("count_partitioned: %d chunks on %d workers", len(chunks), workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        partials = list(pool.map(lambda chunk: Counter(produced_elements(chunk, produce, flatten)), chunks))
    return merge_counters(partials)


def chunked(items: Sequence[Any], size: int) -> List[Sequence[Any]]:
    size = max(1, int(size))
    return [items[i: i + size] for i in range(0, len(items), size)]
