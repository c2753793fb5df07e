"""
Data types
- ParallelSettings: parsed `parallel` config section for CounterBuilder
- CounterStats: summary of a built Counter (distinct elements, total occurrences, top entries)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

STRATEGIES = ("collect", "partition")


@dataclass
class ParallelSettings:
    enabled: bool = True
    max_workers: Optional[int] = None  # None -> sized by get_worker_count
    tasks_per_worker: int = 100
    min_items_for_parallel: int = 10   # below this the sequential path is used
    strategy: str = "collect"          # collect | partition

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ParallelSettings":
        par = (cfg or {}).get("parallel", {}) or {}
        max_workers = par.get("max_workers", None)
        settings = cls(
            enabled=bool(par.get("enabled", True)),
            max_workers=None if max_workers is None else int(max_workers),
            tasks_per_worker=int(par.get("tasks_per_worker", 100)),
            min_items_for_parallel=int(par.get("min_items_for_parallel", 10)),
            strategy=str(par.get("strategy", "collect")),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"parallel.max_workers must be >= 1, got {self.max_workers}")
        if self.tasks_per_worker < 1:
            raise ValueError(f"parallel.tasks_per_worker must be >= 1, got {self.tasks_per_worker}")
        if self.min_items_for_parallel < 0:
            raise ValueError(f"parallel.min_items_for_parallel must be >= 0, got {self.min_items_for_parallel}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"parallel.strategy must be one of {STRATEGIES}, got {self.strategy!r}")


@dataclass
class CounterStats:
    distinct: int                 # number of distinct elements
    total: int                    # sum of all counts
    top: List[Tuple[int, Hashable]] = field(default_factory=list)  # most_common(top_n)
