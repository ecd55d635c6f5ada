"""Unit tests for the X API client (HTTP stubbed)."""

from typing import Any

import pytest

from tweetthief.x_client import XClient, XClientError


class _Response:
    def __init__(self, payload: dict[str, Any], status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def json(self) -> dict[str, Any]:
        return self._payload


_USERS = {
    "users": [
        {"id": "100", "name": "Alice", "username": "alice"},
        {"id": "200", "name": "Mallory", "username": "mallory"},
    ]
}


def _tweet(tweet_id: str, author_id: str, **extra: Any) -> dict[str, Any]:
    return {
        "id": tweet_id,
        "text": f"tweet {tweet_id}",
        "author_id": author_id,
        "created_at": "2024-03-01T12:00:00.000Z",
        **extra,
    }


class _Recorder:
    def __init__(self, *responses: _Response) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, url: str, params: dict[str, Any], timeout: float) -> _Response:
        self.calls.append((url, dict(params)))
        return self.responses.pop(0)


@pytest.fixture
def client() -> XClient:
    return XClient(bearer_token="token")


class TestXClient:
    def test_requires_token(self) -> None:
        with pytest.raises(ValueError):
            XClient(bearer_token="")

    def test_search_parses_posts(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        payload = {
            "data": [
                _tweet("1", "100"),
                _tweet("2", "200", referenced_tweets=[{"type": "retweeted", "id": "1"}]),
                _tweet("3", "200", referenced_tweets=[{"type": "quoted", "id": "1"}]),
            ],
            "includes": _USERS,
        }
        recorder = _Recorder(_Response(payload))
        monkeypatch.setattr(client._session, "get", recorder)

        posts = client.search("tweet")

        assert [p.tweet_id for p in posts] == ["1", "2", "3"]
        assert posts[0].author_display == "Alice (@alice)"
        assert posts[0].created_at.year == 2024
        assert not posts[0].is_retweet
        assert posts[1].is_retweet and posts[1].retweeted_status_id == "1"
        assert not posts[2].is_retweet
        assert recorder.calls[0][1]["query"] == "tweet"

    def test_search_no_results(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(client._session, "get", _Recorder(_Response({"meta": {}})))
        assert client.search("nothing") == []

    def test_error_status_raises(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            client._session, "get", _Recorder(_Response({"title": "Unauthorized"}, 401))
        )
        with pytest.raises(XClientError, match="401"):
            client.search("anything")

    def test_fetch_recent(self, client: XClient, monkeypatch: pytest.MonkeyPatch) -> None:
        recorder = _Recorder(
            _Response({"data": {"id": "100", "name": "Alice", "username": "alice"}}),
            _Response(
                {
                    "data": [_tweet(str(n), "100") for n in range(5)],
                    "includes": _USERS,
                }
            ),
        )
        monkeypatch.setattr(client._session, "get", recorder)

        posts = client.fetch_recent("@alice", 3)

        assert [p.tweet_id for p in posts] == ["0", "1", "2"]
        assert recorder.calls[0][0].endswith("/users/by/username/alice")
        url, params = recorder.calls[1]
        assert url.endswith("/users/100/tweets")
        assert params["max_results"] == 5
        assert params["exclude"] == "retweets"

    def test_fetch_recent_unknown_user(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            client._session, "get", _Recorder(_Response({"errors": [{"title": "Not Found"}]}))
        )
        with pytest.raises(XClientError, match="Unknown user"):
            client.fetch_recent("ghost", 10)

    def test_fetch_recent_follows_pagination(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        recorder = _Recorder(
            _Response({"data": {"id": "100", "name": "Alice", "username": "alice"}}),
            _Response(
                {
                    "data": [_tweet(str(n), "100") for n in range(100)],
                    "includes": _USERS,
                    "meta": {"next_token": "page2"},
                }
            ),
            _Response(
                {
                    "data": [_tweet(str(n), "100") for n in range(100, 150)],
                    "includes": _USERS,
                    "meta": {"next_token": "page3"},
                }
            ),
        )
        monkeypatch.setattr(client._session, "get", recorder)

        posts = client.fetch_recent("alice", 150)

        assert len(posts) == 150
        assert posts[-1].tweet_id == "149"
        first, second = recorder.calls[1][1], recorder.calls[2][1]
        assert first["max_results"] == 100
        assert "pagination_token" not in first
        assert second["max_results"] == 50
        assert second["pagination_token"] == "page2"
        assert len(recorder.calls) == 3

    def test_fetch_recent_stops_when_timeline_ends(
        self, client: XClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        recorder = _Recorder(
            _Response({"data": {"id": "100", "name": "Alice", "username": "alice"}}),
            _Response(
                {
                    "data": [_tweet(str(n), "100") for n in range(30)],
                    "includes": _USERS,
                    "meta": {"result_count": 30},
                }
            ),
        )
        monkeypatch.setattr(client._session, "get", recorder)

        assert len(client.fetch_recent("alice", 150)) == 30
        assert len(recorder.calls) == 2
