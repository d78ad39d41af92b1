"""
Linear API Client - Low-level GraphQL client for the Linear API.

This handles the raw HTTP communication with Linear.
The LinearAdapter uses this to implement the ProjectTrackerPort.

Linear API documentation:
https://developers.linear.app/docs/graphql/working-with-the-graphql-api
"""

import logging
import random
import threading
import time
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from linearctl.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConnectionError,
    RateLimitError,
    ResourceNotFoundError,
    TrackerError,
    TransientError,
)


RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def get_retry_after(response: requests.Response) -> float | None:
    """Parse the Retry-After header (seconds) if present."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return None


def calculate_delay(
    attempt: int,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    backoff_factor: float = 2.0,
    jitter: float = 0.1,
    retry_after: float | None = None,
) -> float:
    """
    Exponential backoff delay for a retry attempt.

    A server-provided Retry-After wins over the computed delay,
    capped at max_delay.
    """
    if retry_after is not None:
        return min(retry_after, max_delay)
    delay = min(initial_delay * (backoff_factor**attempt), max_delay)
    if jitter:
        delay += delay * jitter * random.uniform(-1.0, 1.0)
    return max(0.0, delay)


class LinearRateLimiter:
    """
    Token bucket rate limiter aware of Linear's rate limit headers.

    Linear reports the remaining request budget in
    ``X-RateLimit-Requests-Remaining`` and the reset time (epoch seconds)
    in ``X-RateLimit-Requests-Reset``.
    """

    def __init__(self, requests_per_second: float = 1.0, burst_size: int = 10) -> None:
        self.requests_per_second = requests_per_second
        self.burst_size = burst_size

        self._tokens = float(burst_size)
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

        self._requests_remaining: int | None = None
        self._reset_at: float | None = None

        self._total_requests = 0
        self._total_wait_time = 0.0

    def _refill_tokens(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(float(self.burst_size), self._tokens + elapsed * self.requests_per_second)
        self._last_refill = now

    def acquire(self, timeout: float | None = None) -> bool:
        """
        Take one token, waiting for a refill if needed.

        Returns:
            True if a token was acquired, False if ``timeout`` elapsed first.
        """
        start = time.monotonic()
        while True:
            with self._lock:
                self._refill_tokens()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    self._total_requests += 1
                    self._total_wait_time += time.monotonic() - start
                    return True
                wait = (1.0 - self._tokens) / self.requests_per_second

            if timeout is not None and time.monotonic() - start + wait > timeout:
                return False
            time.sleep(wait)

    def update_from_response(self, response: requests.Response) -> None:
        """Adjust state from Linear's rate limit headers; slow down on 429."""
        remaining = response.headers.get("X-RateLimit-Requests-Remaining")
        reset = response.headers.get("X-RateLimit-Requests-Reset")

        with self._lock:
            if remaining is not None:
                try:
                    self._requests_remaining = int(remaining)
                except ValueError:
                    pass
            if reset is not None:
                try:
                    self._reset_at = float(reset)
                except ValueError:
                    pass
            if response.status_code == 429:
                self.requests_per_second = max(0.1, self.requests_per_second * 0.5)

    def reset(self) -> None:
        """Reset tokens and statistics."""
        with self._lock:
            self._tokens = float(self.burst_size)
            self._last_refill = time.monotonic()
            self._requests_remaining = None
            self._reset_at = None
            self._total_requests = 0
            self._total_wait_time = 0.0

    @property
    def stats(self) -> dict[str, Any]:
        """Snapshot of limiter state."""
        with self._lock:
            return {
                "total_requests": self._total_requests,
                "total_wait_time": self._total_wait_time,
                "available_tokens": self._tokens,
                "requests_per_second": self.requests_per_second,
                "linear_remaining": self._requests_remaining,
                "linear_reset_at": self._reset_at,
            }


class LinearApiClient:
    """
    Low-level Linear GraphQL client.

    Handles authentication, request/response, rate limiting, and error handling.

    Features:
    - Personal API key authentication
    - Automatic retry with exponential backoff for transient failures on queries
    - Mutations are sent once and never retried
    - Optional client-side rate limiting
    - Connection pooling via a shared session
    """

    API_URL = "https://api.linear.app/graphql"

    DEFAULT_MAX_RETRIES = 3
    DEFAULT_INITIAL_DELAY = 1.0
    DEFAULT_MAX_DELAY = 60.0
    DEFAULT_BACKOFF_FACTOR = 2.0
    DEFAULT_JITTER = 0.1

    DEFAULT_REQUESTS_PER_SECOND = 1.0
    DEFAULT_BURST_SIZE = 10

    DEFAULT_POOL_CONNECTIONS = 4
    DEFAULT_POOL_MAXSIZE = 4
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        api_key: str,
        api_url: str = API_URL,
        dry_run: bool = True,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
        jitter: float = DEFAULT_JITTER,
        requests_per_second: float | None = DEFAULT_REQUESTS_PER_SECOND,
        burst_size: int = DEFAULT_BURST_SIZE,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the Linear client.

        Args:
            api_key: Linear personal API key (lin_api_...)
            api_url: GraphQL endpoint
            dry_run: If True, mutations are logged and not sent
            max_retries: Maximum retry attempts for transient query failures
            initial_delay: Initial retry delay in seconds
            max_delay: Maximum retry delay in seconds
            backoff_factor: Multiplier for exponential backoff
            jitter: Random jitter factor (0.1 = 10%)
            requests_per_second: Client-side rate limit (None disables it)
            burst_size: Token bucket size for the rate limiter
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.api_url = api_url
        self.dry_run = dry_run
        self.timeout = timeout
        self.logger = logging.getLogger("LinearApiClient")

        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        self.jitter = jitter

        self._rate_limiter: LinearRateLimiter | None = None
        if requests_per_second is not None and requests_per_second > 0:
            self._rate_limiter = LinearRateLimiter(
                requests_per_second=requests_per_second,
                burst_size=burst_size,
            )

        # Linear expects the raw key, no Bearer prefix, for personal API keys
        self.headers = {
            "Accept": "application/json",
            "Authorization": api_key,
            "Content-Type": "application/json",
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

        adapter = HTTPAdapter(
            pool_connections=self.DEFAULT_POOL_CONNECTIONS,
            pool_maxsize=self.DEFAULT_POOL_MAXSIZE,
        )
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

        self._viewer: dict[str, Any] | None = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Execute a GraphQL query with retry on transient failures.

        Returns:
            The ``data`` object of the response.

        Raises:
            TrackerError: On API or GraphQL errors.
        """
        return self._execute(query, variables, retry=True)

    def mutate(self, mutation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Execute a GraphQL mutation once. Respects dry_run mode.

        Mutations are not idempotent, so a failed attempt is surfaced
        to the caller instead of being repeated.
        """
        if self.dry_run:
            self.logger.info("[DRY-RUN] Would execute mutation")
            return {}
        return self._execute(mutation, variables, retry=False)

    def _execute(
        self,
        query: str,
        variables: dict[str, Any] | None,
        retry: bool,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        attempts = self.max_retries + 1 if retry else 1
        last_exception: Exception | None = None

        for attempt in range(attempts):
            if self._rate_limiter is not None:
                self._rate_limiter.acquire()

            try:
                response = self._session.post(self.api_url, json=body, timeout=self.timeout)
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                last_exception = e
                if attempt < attempts - 1:
                    delay = self._delay(attempt)
                    self.logger.warning(
                        f"Connection error on GraphQL request, retrying in {delay:.2f}s"
                    )
                    time.sleep(delay)
                    continue
                raise ConnectionError(f"Connection to Linear failed: {e}", cause=e) from e
            except requests.exceptions.RequestException as e:
                # Broken responses, redirects, bad URLs: never retried
                raise TrackerError(f"Request to Linear failed: {e}", cause=e) from e

            if self._rate_limiter is not None:
                self._rate_limiter.update_from_response(response)

            if response.status_code in RETRYABLE_STATUS_CODES:
                retry_after = get_retry_after(response)
                if attempt < attempts - 1:
                    delay = self._delay(attempt, retry_after)
                    self.logger.warning(
                        f"Retryable error {response.status_code} from Linear, "
                        f"attempt {attempt + 1}/{attempts}, retrying in {delay:.2f}s"
                    )
                    time.sleep(delay)
                    continue
                if response.status_code == 429:
                    raise RateLimitError("Linear rate limit exceeded", retry_after=retry_after)
                raise TransientError(f"Linear server error {response.status_code}")

            return self._handle_response(response)

        raise TrackerError(f"Request failed after {attempts} attempts", cause=last_exception)

    def _delay(self, attempt: int, retry_after: float | None = None) -> float:
        return calculate_delay(
            attempt,
            initial_delay=self.initial_delay,
            max_delay=self.max_delay,
            backoff_factor=self.backoff_factor,
            jitter=self.jitter,
            retry_after=retry_after,
        )

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(self, response: requests.Response) -> dict[str, Any]:
        """Convert HTTP and GraphQL errors to typed exceptions."""
        status = response.status_code

        if status == 401:
            raise AuthenticationError("Linear authentication failed. Check your API key.")
        if status == 403:
            raise AccessDeniedError("Permission denied. Check your API key's access.")
        if status == 404:
            raise ResourceNotFoundError(f"Linear endpoint not found: {self.api_url}")

        try:
            payload = response.json()
        except ValueError as e:
            raise TrackerError(f"Invalid JSON from Linear (HTTP {status})", cause=e) from e

        if not isinstance(payload, dict):
            raise TrackerError(f"Unexpected response from Linear (HTTP {status})")

        errors = payload.get("errors")
        if errors:
            self._raise_graphql_error(errors)

        if not response.ok:
            body = response.text[:500] if response.text else ""
            raise TrackerError(f"Linear API error {status}: {body}")

        data = payload.get("data")
        return data if isinstance(data, dict) else {}

    def _raise_graphql_error(self, errors: list[dict[str, Any]]) -> None:
        messages = "; ".join(str(e.get("message", e)) for e in errors)
        codes = {
            str((e.get("extensions") or {}).get("code", "")).upper()
            for e in errors
            if isinstance(e, dict)
        }

        if "AUTHENTICATION_ERROR" in codes:
            raise AuthenticationError(f"Linear authentication failed: {messages}")
        if "FORBIDDEN" in codes:
            raise AccessDeniedError(f"Permission denied: {messages}")
        if "RATELIMITED" in codes:
            raise RateLimitError(f"Linear rate limit exceeded: {messages}")
        if "ENTITY_NOT_FOUND" in codes or "NOT_FOUND" in codes:
            raise ResourceNotFoundError(f"Not found: {messages}")
        raise TrackerError(f"GraphQL error: {messages}")

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_viewer(self) -> dict[str, Any]:
        """Get the user the API key belongs to."""
        if self._viewer is None:
            data = self.query("query { viewer { id name email } }")
            self._viewer = data.get("viewer") or {}
        return self._viewer

    def test_connection(self) -> bool:
        """Test if the API connection and credentials are valid."""
        try:
            self.get_viewer()
            return True
        except TrackerError:
            return False

    @property
    def is_connected(self) -> bool:
        """Check if the client has successfully connected."""
        return self._viewer is not None

    # -------------------------------------------------------------------------
    # Resource Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client and release connection pool resources."""
        self._session.close()
        self.logger.debug("Closed HTTP session")

    def __enter__(self) -> "LinearApiClient":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit."""
        self.close()
