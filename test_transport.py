"""
Tests for the retrying TransportClient

Covers:
1. Recovery after transient failures (attempt counting, fixed delay)
2. Exhaustion after the configured attempt count
3. 204 handling and decode failures
4. Logging of each failed attempt
"""
import logging

import pytest
import requests

from conftest import FakeResponse
from portfolio.shared.errors import TransportError
from portfolio.shared.transport import TransportClient


class ScriptedSession:
    """Plays back a fixed list of responses or exceptions, one per request."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_client(session, sleeps, **kwargs):
    return TransportClient("http://api.test/tables", session=session, sleep=sleeps.append, **kwargs)


def test_fails_twice_then_succeeds():
    session = ScriptedSession(
        FakeResponse(500, text="boom"),
        requests.ConnectionError("reset"),
        FakeResponse(200, {"data": [{"id": "1"}]}),
    )
    sleeps = []

    result = make_client(session, sleeps).request("/projects")

    assert result == {"data": [{"id": "1"}]}
    assert len(session.calls) == 3
    assert sleeps == [1.0, 1.0]


def test_always_failing_raises_after_configured_attempts():
    session = ScriptedSession(FakeResponse(503, text="down"))
    sleeps = []

    with pytest.raises(TransportError) as exc_info:
        make_client(session, sleeps).request("/projects")

    error = exc_info.value
    assert len(session.calls) == 3
    assert error.attempts == 3
    assert error.last_status == 503
    assert "503" in error.last_message
    # No sleep after the final attempt
    assert sleeps == [1.0, 1.0]


def test_last_error_is_the_one_surfaced():
    session = ScriptedSession(
        FakeResponse(500),
        FakeResponse(502),
        requests.ConnectionError("Connection refused"),
    )

    with pytest.raises(TransportError) as exc_info:
        make_client(session, []).request("/projects")

    assert exc_info.value.last_status is None
    assert "Connection refused" in exc_info.value.last_message


def test_retry_policy_is_configurable():
    session = ScriptedSession(FakeResponse(500))
    sleeps = []

    with pytest.raises(TransportError) as exc_info:
        make_client(session, sleeps, retry_count=5, retry_delay=0.25).request("/projects")

    assert exc_info.value.attempts == 5
    assert len(session.calls) == 5
    assert sleeps == [0.25] * 4


def test_retry_count_must_be_positive():
    with pytest.raises(ValueError):
        TransportClient("http://api.test", retry_count=0)


def test_no_content_returns_none_without_decoding():
    session = ScriptedSession(FakeResponse(204))

    assert make_client(session, []).delete("/projects/1") is None
    assert len(session.calls) == 1


def test_undecodable_body_is_retried():
    session = ScriptedSession(
        FakeResponse(200, text="<html>not json</html>"),
        FakeResponse(200, {"id": "1"}),
    )
    sleeps = []

    assert make_client(session, sleeps).get("/projects/1") == {"id": "1"}
    assert len(session.calls) == 2
    assert sleeps == [1.0]


def test_request_shape():
    session = ScriptedSession(FakeResponse(201, {"id": "9"}))

    make_client(session, [], timeout=3).post("/projects", json={"title": "A"})

    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "http://api.test/tables/projects"
    assert kwargs["json"] == {"title": "A"}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 3


def test_each_failed_attempt_is_logged(caplog):
    session = ScriptedSession(FakeResponse(500), FakeResponse(500), FakeResponse(200, {}))

    with caplog.at_level(logging.ERROR, logger="portfolio.shared.transport"):
        make_client(session, []).request("/profile")

    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert "attempt 1" in messages[0]
    assert "attempt 2" in messages[1]
