"""
HTTP wrapper for OpenAI-compatible /v1/chat/completions endpoints.

Works with the Hugging Face router, OpenAI and any other compatible provider.
Failures are classified so callers can tell configuration problems (auth,
unknown model) from transient ones (rate limit, 5xx, network), which are
retried with exponential backoff and jitter.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class LLMAPIError(Exception):
    """Raised when the LLM API returns an error."""

    retryable = False

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"LLM API error {status_code}: {message}")


class ProviderAuthError(LLMAPIError):
    """401/403: bad or missing API key."""


class ProviderNotFoundError(LLMAPIError):
    """404: unknown model or endpoint."""


class ProviderRateLimitError(LLMAPIError):
    retryable = True


class ProviderServerError(LLMAPIError):
    retryable = True


class ProviderNetworkError(LLMAPIError):
    """Timeouts, connection resets, TLS failures and broken response bodies."""
    retryable = True


class ProviderResponseError(LLMAPIError):
    """The provider answered 200 with a body we cannot read."""


class ProviderConfigError(LLMAPIError):
    """The request could not be built, e.g. a base URL without a scheme."""


def classify_status(status_code: int, message: str) -> LLMAPIError:
    if status_code in (401, 403):
        return ProviderAuthError(status_code, message)
    if status_code == 404:
        return ProviderNotFoundError(status_code, message)
    if status_code == 429:
        return ProviderRateLimitError(status_code, message)
    if status_code >= 500:
        return ProviderServerError(status_code, message)
    return LLMAPIError(status_code, message)


def extract_content(data: Dict[str, Any]) -> str:
    """Assistant text from a chat completion body; list content is joined."""
    try:
        content = data["choices"][0]["message"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        raise ProviderResponseError(200, "Malformed chat completion body")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            c if isinstance(c, str) else str(c.get("text", "")) if isinstance(c, dict) else ""
            for c in content
        )
    return ""


@dataclass
class LLMClient:
    """
    Chat completions client with bounded retries.

    Retry delay for attempt ``n`` (0-based) is
    ``min(max_backoff, backoff_base * 2**n) + uniform(0, backoff_base)``.
    Auth and not-found errors are raised immediately.
    """

    api_key: str
    base_url: str
    model: str
    timeout: float = 20.0
    max_retries: int = 2
    backoff_base: float = 0.5
    max_backoff: float = 8.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    session: Any = field(default=None, repr=False)

    def __post_init__(self):
        self.base_url = self.base_url.strip().rstrip("/")
        if self.session is None:
            self.session = requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _do_request(self, url: str, body: Dict[str, Any]) -> str:
        """Make a single chat completion request. Returns content or raises."""
        try:
            resp = self.session.post(
                url,
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise ProviderNetworkError(408, "Request timed out")
        except requests.exceptions.SSLError as e:
            raise ProviderNetworkError(0, f"TLS error: {e}")
        except requests.exceptions.ConnectionError as e:
            raise ProviderNetworkError(0, f"Connection error: {e}")
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as e:
            raise ProviderConfigError(0, f"Invalid endpoint {url!r}: {e}")
        except requests.exceptions.RequestException as e:
            raise ProviderNetworkError(0, f"Request failed: {e}")

        if resp.status_code == 200:
            try:
                data = resp.json()
            except ValueError:
                raise ProviderResponseError(200, "Response body is not JSON")
            return extract_content(data)

        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After", "?")
            raise ProviderRateLimitError(429, f"Rate limited (Retry-After: {retry_after}s)")

        raise classify_status(resp.status_code, resp.text[:300])

    def backoff_delay(self, attempt: int) -> float:
        return min(self.max_backoff, self.backoff_base * 2 ** attempt) + random.uniform(0, self.backoff_base)

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.4,
        max_tokens: int = 300,
        model_override: Optional[str] = None,
    ) -> str:
        """
        Call /chat/completions and return the assistant's content.

        Raises the classified LLMAPIError once retries are exhausted or
        immediately for non-retryable failures.
        """
        body: Dict[str, Any] = {
            "model": model_override or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        url = f"{self.base_url}/chat/completions"

        for attempt in range(self.max_retries + 1):
            try:
                return self._do_request(url, body)
            except (ProviderAuthError, ProviderNotFoundError, ProviderConfigError) as e:
                logger.error(f"[LLMClient] Configuration error, not retrying: {e}")
                raise
            except LLMAPIError as e:
                if not e.retryable or attempt >= self.max_retries:
                    raise
                delay = self.backoff_delay(attempt)
                logger.warning(
                    f"[LLMClient] {e} (attempt {attempt + 1}/{self.max_retries + 1}), "
                    f"retrying in {delay:.2f}s"
                )
                self.sleep(delay)

        raise LLMAPIError(0, "retry loop exited without a result")  # pragma: no cover

    @property
    def is_available(self) -> bool:
        """Check if the client has an API key and endpoint configured."""
        return bool(self.api_key and self.base_url)
