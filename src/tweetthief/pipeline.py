"""Pipeline orchestration — wires fetch → search → pair → score → rank."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Protocol

from tweetthief import config
from tweetthief.incidents import build_incidents
from tweetthief.matcher import SearchFn, collect_matches
from tweetthief.models import Incident, Post
from tweetthief.pairs import organize
from tweetthief.report import aggregate
from tweetthief.similarity import Scorer, default_scorer
from tweetthief.x_client import XClient

logger = logging.getLogger(__name__)

_LEVEL_ALIASES: dict[str, str] = {"TRACE": "DEBUG"}


class ScanError(Exception):
    """Raised when a scan cannot produce a report."""


class PostSource(Protocol):
    def fetch_recent(self, username: str, limit: int) -> list[Post]: ...

    def search(self, query: str) -> list[Post]: ...


def _resolve_level(name: str) -> int | None:
    """Map a level name to its number; ``TRACE`` is treated as ``DEBUG``."""
    name = name.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    return logging.getLevelNamesMapping().get(name)


def setup_logging(level: str | None = None) -> None:
    """Configure process-wide logging once, from ``LOG_LEVEL`` by default.

    Unknown level names fall back to INFO with a warning.
    """
    requested = level or config.LOG_LEVEL
    resolved = _resolve_level(requested)
    logging.basicConfig(
        level=resolved if resolved is not None else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if resolved is None:
        logger.warning("Unknown LOG_LEVEL %r; using INFO", requested)


def find_thefts(
    posts: Sequence[Post],
    search: SearchFn,
    scorer: Scorer | None = None,
    max_workers: int = config.SEARCH_WORKERS,
) -> list[Incident]:
    """Run the matching-and-ranking pipeline over already-fetched *posts*."""
    candidate_sets = collect_matches(posts, search, max_workers=max_workers)
    pairs = organize(candidate_sets)
    incidents = build_incidents(pairs, scorer or default_scorer())
    return aggregate(incidents)


def run_scan(
    username: str,
    count: int = config.DEFAULT_COUNT,
    *,
    client: PostSource | None = None,
    scorer: Scorer | None = None,
) -> list[Incident]:
    """Scan *username*'s last *count* tweets and return the ranked report.

    Any failure is re-raised as :class:`ScanError` with the cause attached;
    no partial report is returned.
    """
    logger.info("=== tweetthief scan start [@%s, count=%d] ===", username, count)

    try:
        if client is None:
            client = XClient(
                bearer_token=config.X_BEARER_TOKEN,
                search_max_results=config.SEARCH_MAX_RESULTS,
                timeout=config.HTTP_TIMEOUT,
            )

        # ── 1. Fetch timeline ─────────────────────────────────────────
        posts = client.fetch_recent(username, count)
        if not posts:
            logger.warning("No tweets fetched for @%s — nothing to scan.", username)
            return []

        # ── 2. Search, pair, score, rank ──────────────────────────────
        report = find_thefts(posts, client.search, scorer=scorer)
    except Exception as exc:
        raise ScanError(f"Scan of @{username} failed: {exc}") from exc

    logger.info("=== tweetthief scan done [@%s] — %d incidents ===", username, len(report))
    return report
