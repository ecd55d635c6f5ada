"""Flatten candidate sets into (original, theft) pairs ordered by authorship."""

from __future__ import annotations

import logging

from tweetthief.matcher import CandidateSet
from tweetthief.models import Post

logger = logging.getLogger(__name__)

OrderedPair = tuple[Post, Post]


def order_by_authorship(first: Post, second: Post) -> OrderedPair:
    """Return ``(original, theft)``; the earlier post is the original.

    Equal timestamps keep the given order.
    """
    if second.created_at < first.created_at:
        return second, first
    return first, second


def organize(candidate_sets: CandidateSet) -> list[OrderedPair]:
    """Expand each source post into one pair per candidate.

    Sources without candidates are skipped. Output keeps source order, then
    candidate order.
    """
    pairs: list[OrderedPair] = []
    for source, candidates in candidate_sets:
        if not candidates:
            continue
        for candidate in candidates:
            pairs.append(order_by_authorship(source, candidate))

    logger.info("Organized %d candidate pairs", len(pairs))
    return pairs
