"""
Counter construction driven by configuration

Purpose
- Turn a stream of items into a Counter, optionally mapping each item through `produce` first
- Pick the build path from the `parallel` config section:
  - sequential: Counter(map(produce, stream)) when disabled or the input is small
  - collect:    elements produced on a thread pool, gathered in order, counted once
  - partition:  input split into chunks of tasks_per_worker, one Counter per chunk, summed into one
- produce may return several elements per item when build(..., flatten=True) (word counts via str.split)
- Summarize a Counter as CounterStats (distinct, total, top_n most common)

Config keys (recommended)
- parallel: { enabled: true, max_workers: 4, tasks_per_worker: 100, min_items_for_parallel: 10, strategy: collect }
- report: { top_n: 10 }
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from .types import CounterStats, ParallelSettings
from tally.modules.counting.counter import Counter
from tally.modules.counting.parallel import (
    chunked,
    count_partitioned,
    counter_from_parallel,
    get_worker_count,
    produced_elements,
)

logger = logging.getLogger(__name__)


class CounterBuilder:
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.cfg = config or {}
        self.parallel = ParallelSettings.from_config(self.cfg)
        report = self.cfg.get("report", {}) or {}
        self.top_n = int(report.get("top_n", 10))

    # -------------------------- Build -------------------------- #
    def build(
        self,
        stream: Iterable[Any],
        produce: Optional[Callable[[Any], Any]] = None,
        flatten: bool = False,
    ) -> Counter:
        """
        flatten=True when produce returns an iterable of elements per item (e.g. str.split).
        With parallel disabled the stream is consumed lazily; otherwise it is materialized to size the pool.
        """
        par = self.parallel
        if not par.enabled:
            logger.debug("build: parallel disabled, sequential path")
            return Counter(produced_elements(stream, produce, flatten))

        items = stream if isinstance(stream, (list, tuple)) else list(stream)
        if len(items) < par.min_items_for_parallel:
            logger.debug("build: sequential path for %d items", len(items))
            return Counter(produced_elements(items, produce, flatten))

        workers = par.max_workers or get_worker_count(len(items), par.tasks_per_worker)
        logger.debug("build: %s strategy, %d items, %d workers", par.strategy, len(items), workers)

        if par.strategy == "partition":
            chunks = chunked(items, par.tasks_per_worker)
            return count_partitioned(chunks, produce=produce, max_workers=workers, flatten=flatten)
        return counter_from_parallel(items, produce=produce, max_workers=workers, flatten=flatten)

    # -------------------------- Summary -------------------------- #
    def stats(self, counter: Counter) -> CounterStats:
        return CounterStats(
            distinct=len(counter),
            total=counter.total(),
            top=counter.most_common(self.top_n),
        )
