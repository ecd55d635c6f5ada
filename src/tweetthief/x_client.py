"""Minimal X API v2 client: user timeline and Recent Search (read-only)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from tweetthief.models import Post

logger = logging.getLogger(__name__)

_API_BASE = "https://api.twitter.com/2"
_RECENT_SEARCH_URL = f"{_API_BASE}/tweets/search/recent"
_USER_BY_NAME_URL = f"{_API_BASE}/users/by/username/{{username}}"
_USER_TWEETS_URL = f"{_API_BASE}/users/{{user_id}}/tweets"

# Fields we always request.
_TWEET_FIELDS = "created_at,author_id,referenced_tweets"
_EXPANSIONS = "author_id"
_USER_FIELDS = "name,username"

# Per-endpoint max_results bounds enforced by the API.
_TIMELINE_MIN, _TIMELINE_MAX = 5, 100
_SEARCH_MIN, _SEARCH_MAX = 10, 100


class XClientError(Exception):
    """Raised when the X API returns an unexpected response."""


class XClient:
    """Thin wrapper around the user-timeline and recent-search endpoints."""

    def __init__(
        self,
        bearer_token: str,
        search_max_results: int = 10,
        timeout: float = 30,
    ) -> None:
        if not bearer_token:
            raise ValueError("X_BEARER_TOKEN is required but was empty.")
        self._bearer = bearer_token
        self._search_max_results = min(max(search_max_results, _SEARCH_MIN), _SEARCH_MAX)
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {self._bearer}"})

    # ── public ──────────────────────────────────────────────────────────
    def fetch_recent(self, username: str, limit: int) -> list[Post]:
        """Return up to *limit* of *username*'s most recent non-retweet posts.

        Follows ``meta.next_token`` until *limit* posts are collected or the
        timeline runs out.
        """
        user_id = self._user_id(username)
        url = _USER_TWEETS_URL.format(user_id=user_id)
        params: dict[str, Any] = {
            "exclude": "retweets",
            "tweet.fields": _TWEET_FIELDS,
            "expansions": _EXPANSIONS,
            "user.fields": _USER_FIELDS,
        }

        posts: list[Post] = []
        while len(posts) < limit:
            remaining = limit - len(posts)
            params["max_results"] = min(max(remaining, _TIMELINE_MIN), _TIMELINE_MAX)
            data = self._get(url, params)
            posts.extend(_parse_posts(data))

            next_token = data.get("meta", {}).get("next_token")
            if not next_token:
                break
            params["pagination_token"] = next_token

        posts = posts[:limit]
        logger.info("Fetched %d tweets from @%s", len(posts), username)
        return posts

    def search(self, query: str) -> list[Post]:
        """Execute a single Recent Search query and return parsed posts."""
        params: dict[str, Any] = {
            "query": query,
            "max_results": self._search_max_results,
            "tweet.fields": _TWEET_FIELDS,
            "expansions": _EXPANSIONS,
            "user.fields": _USER_FIELDS,
        }
        data = self._get(_RECENT_SEARCH_URL, params)
        posts = _parse_posts(data)
        if not posts:
            logger.debug("No results for query: %s", query)
        else:
            logger.debug("Found %d tweets for query: %s", len(posts), query)
        return posts

    # ── private ─────────────────────────────────────────────────────────
    def _user_id(self, username: str) -> str:
        data = self._get(_USER_BY_NAME_URL.format(username=username.lstrip("@")), {})
        user = data.get("data")
        if not user:
            raise XClientError(f"Unknown user: @{username}")
        return str(user["id"])

    def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        resp = self._session.get(url, params=params, timeout=self._timeout)
        if resp.status_code != 200:
            raise XClientError(
                f"X API returned {resp.status_code}: {resp.text[:500]}"
            )
        return resp.json()  # type: ignore[no-any-return]


def _parse_posts(data: dict[str, Any]) -> list[Post]:
    """Build :class:`Post` objects from a v2 tweets payload with user expansions."""
    tweets_raw: list[dict[str, Any]] = data.get("data", [])
    if not tweets_raw:
        return []

    # Build author-id → user map from expansions
    includes = data.get("includes", {})
    users: list[dict[str, Any]] = includes.get("users", [])
    author_map: dict[str, dict[str, Any]] = {str(u["id"]): u for u in users}

    posts: list[Post] = []
    for raw in tweets_raw:
        author = author_map.get(str(raw.get("author_id", "")), {})
        retweet_of = next(
            (
                str(ref["id"])
                for ref in raw.get("referenced_tweets", []) or []
                if ref.get("type") == "retweeted"
            ),
            None,
        )
        posts.append(
            Post(
                tweet_id=str(raw["id"]),
                text=raw.get("text", ""),
                author_name=author.get("name", ""),
                author_username=author.get("username", ""),
                created_at=raw["created_at"],
                retweeted=retweet_of is not None,
                retweeted_status_id=retweet_of,
            )
        )
    return posts
