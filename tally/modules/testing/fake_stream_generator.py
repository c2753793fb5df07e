"""
Parameterized fake element streams for exercising Counter

Purpose
- Generate reproducible, skewed element streams with known weights to validate:
  - exact counts after update/subtract
  - most_common ordering with heavy hitters and long tails
  - identical results between sequential and parallel construction
- Same seed -> same stream (a private random.Random is used, global state is untouched)
"""

from typing import Any, Dict, List, Optional
import random


def zipf_weights(vocab: List[Any], exponent: float = 1.1) -> Dict[Any, float]:
    """
    Zipf-like weights: the i-th element of vocab gets 1 / (i+1)^exponent.
    """
    return {elem: 1.0 / float(i + 1) ** float(exponent) for i, elem in enumerate(vocab)}


def fake_element_stream(
    weights: Dict[Any, float],
    n: int,
    *,
    heavy: Optional[Dict[str, Any]] = None,
    seed: int = 2026,
) -> List[Any]:
    """
    Draw n elements according to weights.

    heavy example (optional burst injection):
      {"elements": ["the", "a"], "share": 0.30}  # 30% of draws forced onto these elements
    """
    rng = random.Random(int(seed))
    elems = list(weights.keys())
    w = [float(weights[e]) for e in elems]

    heavy_elems: List[Any] = []
    heavy_share = 0.0
    if isinstance(heavy, dict):
        heavy_elems = list(heavy.get("elements", []))
        heavy_share = float(heavy.get("share", 0.0))

    stream: List[Any] = []
    for _ in range(int(n)):
        if heavy_elems and rng.random() < heavy_share:
            stream.append(rng.choice(heavy_elems))
        else:
            stream.append(rng.choices(elems, weights=w, k=1)[0])
    return stream


def fake_text_lines(
    vocab: List[str],
    num_lines: int,
    *,
    words_per_line: int = 8,
    exponent: float = 1.1,
    seed: int = 2026,
) -> List[str]:
    """
    Space-separated lines of Zipf-distributed words, e.g. for word counting with produce=str.split, flatten=True.
    """
    rng = random.Random(int(seed))
    weights = zipf_weights(vocab, exponent=exponent)
    lines = []
    for _ in range(int(num_lines)):
        words = fake_element_stream(weights, words_per_line, seed=rng.randrange(1 << 30))
        lines.append(" ".join(words))
    return lines
