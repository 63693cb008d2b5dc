"""
Retrying HTTP client for the portfolio REST API.

Every request is attempted up to retry_count times with a fixed delay
between attempts. Non-2xx responses, network errors and undecodable bodies
all count as a failed attempt. There is no backoff growth and no jitter.
"""
import logging
import time
from typing import Any, Callable, Optional

import requests
from tenacity import Retrying, RetryError, retry_if_exception_type, stop_after_attempt, wait_fixed

from portfolio.shared.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}

# Undecodable bodies raise ValueError from response.json()
RETRYABLE_ERRORS = (requests.RequestException, ValueError)


class TransportClient:
    """
    Thin wrapper around a requests session with uniform-interval retry.

    The session and sleep function are injectable so callers can swap the
    transport (tests, TestClient) without touching the retry policy.
    """

    def __init__(
        self,
        base_url: str,
        retry_count: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 10,
        session: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if retry_count < 1:
            raise ValueError("retry_count must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.retry_count = retry_count
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.sleep = sleep

    def request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[dict] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Issue a request and return the decoded JSON body.

        Returns None for 204 No Content. Raises TransportError once all
        attempts have failed, carrying the last status and message seen.
        """
        url = f"{self.base_url}{path}"
        statuses: list = []

        retrying = Retrying(
            stop=stop_after_attempt(self.retry_count),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            sleep=self.sleep,
        )

        try:
            for attempt in retrying:
                with attempt:
                    number = attempt.retry_state.attempt_number
                    return self._send(method, url, params, json, number, statuses)
        except RetryError as e:
            raise TransportError(
                attempts=self.retry_count,
                last_message=str(e.last_attempt.exception()),
                last_status=statuses[-1] if statuses else None,
            )

    def _send(
        self,
        method: str,
        url: str,
        params: Optional[dict],
        json: Optional[Any],
        attempt: int,
        statuses: list,
    ) -> Any:
        statuses.append(None)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
            statuses[-1] = response.status_code

            if not 200 <= response.status_code < 300:
                raise requests.HTTPError(f"HTTP error! status: {response.status_code}")

            if response.status_code == 204:
                return None

            return response.json()
        except RETRYABLE_ERRORS as e:
            logger.error(f"API request failed (attempt {attempt}): {method} {url}: {e}")
            raise

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request(path, params=params)

    def post(self, path: str, json: Any) -> Any:
        return self.request(path, method="POST", json=json)

    def delete(self, path: str) -> Any:
        return self.request(path, method="DELETE")
