"""Pairwise text-similarity metrics and the registry that applies them."""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable

from rapidfuzz import fuzz

logger = logging.getLogger(__name__)

Metric = Callable[[str, str], float]

_WHITESPACE_RE = re.compile(r"\s+")


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def dice_coefficient(a: str, b: str) -> float:
    """Sørensen–Dice coefficient over character bigrams, ignoring whitespace."""
    a = _WHITESPACE_RE.sub("", a)
    b = _WHITESPACE_RE.sub("", b)

    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    first = _bigrams(a)
    second = _bigrams(b)
    overlap = sum((first & second).values())
    return 2.0 * overlap / (len(a) + len(b) - 2)


def fuzzy_token_score(a: str, b: str) -> float:
    """rapidfuzz token-set ratio scaled to [0, 1]."""
    if a and a == b:
        return 1.0
    return fuzz.token_set_ratio(a, b) / 100.0


class Scorer:
    """Ordered registry of named similarity metrics.

    ``score`` applies every metric in registration order, so the returned
    mapping always has the same keys as :attr:`metric_names`.
    """

    def __init__(self) -> None:
        self._metrics: dict[str, Metric] = {}

    def register(self, name: str, metric: Metric) -> None:
        self._metrics[name] = metric

    @property
    def metric_names(self) -> list[str]:
        return list(self._metrics)

    def score(self, a: str, b: str) -> dict[str, float]:
        scores: dict[str, float] = {}
        for name, metric in self._metrics.items():
            value = metric(a, b) or 0.0
            scores[name] = min(max(float(value), 0.0), 1.0)
        logger.debug("Scored %r vs %r: %s", a[:40], b[:40], scores)
        return scores


def default_scorer() -> Scorer:
    """Return a scorer with the built-in ``dice`` and ``fuzzy`` metrics."""
    scorer = Scorer()
    scorer.register("dice", dice_coefficient)
    scorer.register("fuzzy", fuzzy_token_score)
    return scorer
