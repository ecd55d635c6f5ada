"""Score ordered pairs and turn them into incidents."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from tweetthief.models import Incident
from tweetthief.pairs import OrderedPair
from tweetthief.similarity import Scorer, default_scorer

logger = logging.getLogger(__name__)


def mean_confidence(scores: Mapping[str, float]) -> float:
    """Arithmetic mean of the metric values; 0.0 when there are none."""
    if not scores:
        return 0.0
    return sum(scores.values()) / len(scores)


def build_incident(pair: OrderedPair, scorer: Scorer | None = None) -> Incident:
    original, theft = pair
    scorer = scorer or default_scorer()
    scores = scorer.score(original.text, theft.text)
    return Incident(
        original=original,
        theft=theft,
        scores=scores,
        confidence=mean_confidence(scores),
    )


def build_incidents(
    pairs: list[OrderedPair], scorer: Scorer | None = None
) -> list[Incident]:
    scorer = scorer or default_scorer()
    incidents = [build_incident(pair, scorer) for pair in pairs]
    logger.info("Built %d incidents", len(incidents))
    return incidents
