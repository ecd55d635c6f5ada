"""Collect candidate copies of each source post via text search."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor

from tweetthief import config
from tweetthief.models import Post

logger = logging.getLogger(__name__)

SearchFn = Callable[[str], list[Post]]
CandidateSet = list[tuple[Post, list[Post]]]


class MatchCollectionError(Exception):
    """Raised when the search for one source post fails."""

    def __init__(self, tweet_id: str, message: str) -> None:
        super().__init__(f"Search failed for tweet {tweet_id}: {message}")
        self.tweet_id = tweet_id


def filter_candidates(source: Post, candidates: Sequence[Post]) -> list[Post]:
    """Drop the source post itself and any retweets from *candidates*."""
    return [
        c
        for c in candidates
        if c.tweet_id != source.tweet_id and not c.is_retweet
    ]


def collect_matches(
    posts: Sequence[Post],
    search: SearchFn,
    max_workers: int = config.SEARCH_WORKERS,
) -> CandidateSet:
    """Search for every post's text concurrently and filter the results.

    Returns ``(source, candidates)`` tuples in the order of *posts*. All
    searches are allowed to finish; the first failure in source order is
    then raised as :class:`MatchCollectionError` with the cause chained.
    """
    if not posts:
        return []

    with ThreadPoolExecutor(max_workers=max(max_workers, 1)) as executor:
        futures: list[tuple[Post, Future[list[Post]]]] = [
            (post, executor.submit(search, post.text)) for post in posts
        ]

    collected: CandidateSet = []
    for post, future in futures:
        try:
            found = future.result()
        except Exception as exc:
            raise MatchCollectionError(post.tweet_id, str(exc)) from exc

        candidates = filter_candidates(post, found)
        logger.debug(
            "Tweet %s: %d results, %d candidates after filtering",
            post.tweet_id,
            len(found),
            len(candidates),
        )
        collected.append((post, candidates))

    logger.info(
        "Collected candidates for %d tweets (%d total)",
        len(collected),
        sum(len(c) for _, c in collected),
    )
    return collected
