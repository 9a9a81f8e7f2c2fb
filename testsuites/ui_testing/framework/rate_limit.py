# ================================================================================
# Rate Limit Retry Module
# ================================================================================
#
# The portfolio site sits behind a host that answers bursts of automated
# traffic with HTTP 429 and occasionally tears down the page mid-navigation.
# This module retries a caller-supplied async operation only for those
# failures; anything else propagates on the first attempt.
#
# Key Features:
#   - Explicit RateLimitConfig passed by the caller
#   - Exponential backoff between attempts
#   - Protected navigation (429 responses become retryable errors)
#   - Protected click with a short post-click pause
#
# Usage:
#   config = RateLimitConfig(max_retries=3, delay=1.0)
#   response = await navigate_with_protection(page, url, config)
#   result = await with_rate_limit_retry(lambda: page.goto(url), config)
#
# ================================================================================

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger
from playwright.async_api import Page, Response

from portfolio_tools.common import ConfigLoader


T = TypeVar("T")

# Lower-cased message fragments that identify a rate-limit style failure
RATE_LIMIT_PATTERNS = (
    "429",
    "rate limit",
    "too many requests",
    "target page, context or browser has been closed",
)


class RateLimitError(Exception):
    """Raised when the site answers with HTTP 429."""
    pass


@dataclass(frozen=True)
class RateLimitConfig:
    """
    Retry policy for rate-limited operations.

    Attributes:
        max_retries: Total number of attempts (including the first one)
        delay: Wait before the second attempt, in seconds
        backoff: Multiplier applied to the wait after every further attempt
    """
    max_retries: int = 3
    delay: float = 1.0
    backoff: float = 2.0

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    def wait_for_attempt(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return self.delay * (self.backoff ** (attempt - 1))

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "RateLimitConfig":
        """Build the policy from the rate_limit section of config.yaml."""
        config = config or ConfigLoader()
        return cls(
            max_retries=int(config.get("rate_limit.max_retries", 3)),
            delay=float(config.get("rate_limit.delay", 1.0)),
            backoff=float(config.get("rate_limit.backoff", 2.0)),
        )


def is_rate_limit_error(error: BaseException) -> bool:
    """Check whether an error message looks like rate limiting."""
    message = str(error).lower()
    return any(pattern in message for pattern in RATE_LIMIT_PATTERNS)


async def with_rate_limit_retry(
    operation: Callable[[], Awaitable[T]],
    config: RateLimitConfig,
) -> T:
    """
    Run an async operation, retrying only on rate-limit errors.

    Args:
        operation: Zero-argument callable returning an awaitable
        config: Retry policy

    Returns:
        The operation's result

    Raises:
        The last error once retries are exhausted, or the first
        non-rate-limit error immediately.
    """
    last_error: Optional[BaseException] = None

    for attempt in range(1, config.max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_rate_limit_error(e):
                raise
            last_error = e
            if attempt < config.max_retries:
                wait = config.wait_for_attempt(attempt)
                logger.warning(
                    f"Rate limiting detected on attempt {attempt}/{config.max_retries}. "
                    f"Waiting {wait:.1f}s..."
                )
                await asyncio.sleep(wait)

    logger.error(
        f"Rate limiting persisted after {config.max_retries} attempts: {last_error}"
    )
    raise last_error


async def navigate_with_protection(
    page: Page,
    url: str,
    config: RateLimitConfig,
    **options: Any,
) -> Optional[Response]:
    """
    Navigate to a URL, retrying when the site rate-limits the request.

    Args:
        page: Playwright page
        url: Absolute URL
        config: Retry policy
        **options: Extra page.goto() options (override the defaults)
    """
    goto_options = {"wait_until": "domcontentloaded", "timeout": 60000, **options}

    async def _goto() -> Optional[Response]:
        response = await page.goto(url, **goto_options)
        if response is not None and response.status == 429:
            raise RateLimitError(f"Rate limit encountered (429) for {url}")
        return response

    return await with_rate_limit_retry(_goto, config)


async def click_with_protection(
    page: Page,
    selector: str,
    config: RateLimitConfig,
    pause_ms: int = 500,
    **options: Any,
) -> None:
    """Click a selector with rate-limit retries and a short pause afterwards."""
    click_options = {"timeout": 30000, **options}

    async def _click() -> None:
        await page.locator(selector).click(**click_options)
        await page.wait_for_timeout(pause_ms)

    await with_rate_limit_retry(_click, config)


__all__ = [
    "RATE_LIMIT_PATTERNS",
    "RateLimitConfig",
    "RateLimitError",
    "click_with_protection",
    "is_rate_limit_error",
    "navigate_with_protection",
    "with_rate_limit_retry",
]
