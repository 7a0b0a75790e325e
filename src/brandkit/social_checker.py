"""
Social media username availability checking.

Each platform is probed with a single GET to the profile URL. The result is
a best-effort heuristic, not ground truth:
- any status other than 200 means the profile doesn't exist (available)
- a 200 page that mentions the username means the profile exists (taken)

Platforms that always answer 200, or never echo the username, will give
wrong answers. A failed probe is always reported as taken, never available.
"""

import asyncio
import logging
from dataclasses import dataclass
from types import MappingProxyType

import httpx

from .errors import ProbeError, UnsupportedPlatformWarning

logger = logging.getLogger(__name__)

# Supported platforms and their profile URL templates
PLATFORMS = MappingProxyType({
    "github": "https://github.com/{username}",
    "twitter": "https://twitter.com/{username}",
    "instagram": "https://www.instagram.com/{username}",
    "facebook": "https://www.facebook.com/{username}",
    "youtube": "https://www.youtube.com/@{username}",
    "tiktok": "https://www.tiktok.com/@{username}",
    "pinterest": "https://www.pinterest.com/{username}",
    "linkedin": "https://www.linkedin.com/in/{username}",
    "reddit": "https://www.reddit.com/user/{username}",
    "threads": "https://www.threads.net/@{username}",
})

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
}
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class UsernameCheckResult:
    """Availability of a username on one platform."""
    platform: str
    available: bool


def supported_platforms() -> list[str]:
    return list(PLATFORMS)


def strip_extension(domain: str) -> str:
    """Turn a domain into a username base ("example.com" -> "example")."""
    return domain.split(".", 1)[0]


def profile_url(username: str, platform: str) -> str:
    return PLATFORMS[platform].format(username=username)


def profile_indicates_taken(status_code: int, body: str, username: str) -> bool:
    """Presence heuristic: a 200 page that echoes the username is a real profile."""
    if status_code != 200:
        return False
    return username in body


def _decode_body(response: httpx.Response, platform: str) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProbeError(platform, f"could not decode response: {e}") from e


def _availability_from_response(response: httpx.Response, username: str, platform: str) -> bool:
    """Apply the presence heuristic to a fetched profile page. Raises ProbeError."""
    if response.status_code != 200:
        return True
    body = _decode_body(response, platform)
    return not profile_indicates_taken(response.status_code, body, username)


def _normalize_platform(platform: str) -> str | None:
    key = str(platform).strip().lower()
    if key not in PLATFORMS:
        logger.warning("%s: Unsupported platform: %s", UnsupportedPlatformWarning.__name__, platform)
        return None
    return key


class SocialUsernameChecker:
    """
    Probes social platform profile URLs.

    Usage:
        with SocialUsernameChecker() as checker:
            checker.is_available("acme", "github")
    """

    def __init__(self, http_client: httpx.Client | None = None, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=False,
        )

    def __enter__(self) -> "SocialUsernameChecker":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _probe(self, username: str, platform: str) -> bool:
        """Fetch the profile and apply the heuristic. Raises ProbeError."""
        url = profile_url(username, platform)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise ProbeError(platform, str(e) or type(e).__name__) from e

        return _availability_from_response(response, username, platform)

    def is_available(self, username: str, platform: str) -> bool:
        """
        Check if a username is available on a platform.

        Returns:
            True if available, False if taken, unsupported, or the probe failed.
        """
        key = _normalize_platform(platform)
        if key is None:
            return False

        try:
            return self._probe(username, key)
        except Exception as e:  # any probe failure counts as taken
            logger.warning("⚠️ Error checking %s: %s", key, e)
            return False

    def check_platforms(self, username: str, platforms: list[str] | None = None) -> list[UsernameCheckResult]:
        """Check several platforms one at a time, in the given order (default: all)."""
        if platforms is None:
            platforms = supported_platforms()
        return [
            UsernameCheckResult(platform=str(p).strip().lower(), available=self.is_available(username, p))
            for p in platforms
        ]


class AsyncSocialUsernameChecker:
    """
    Async probe client for checking many platforms in parallel.

    Usage:
        async with AsyncSocialUsernameChecker() as checker:
            results = await checker.check_platforms("acme")
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client

    async def __aenter__(self) -> "AsyncSocialUsernameChecker":
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=DEFAULT_HEADERS,
                timeout=self._timeout,
                follow_redirects=False,
            )
        return self

    async def __aexit__(self, *args) -> None:
        if self._owns_client and self._client:
            await self._client.aclose()
            self._client = None

    async def _probe(self, username: str, platform: str) -> bool:
        url = profile_url(username, platform)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise ProbeError(platform, str(e) or type(e).__name__) from e

        return _availability_from_response(response, username, platform)

    async def is_available(self, username: str, platform: str) -> bool:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        key = _normalize_platform(platform)
        if key is None:
            return False

        try:
            return await self._probe(username, key)
        except Exception as e:  # any probe failure counts as taken
            logger.warning("⚠️ Error checking %s: %s", key, e)
            return False

    async def check_platforms(self, username: str, platforms: list[str] | None = None) -> list[UsernameCheckResult]:
        """Check platforms concurrently; results follow the requested order."""
        if platforms is None:
            platforms = supported_platforms()

        tasks = [self.is_available(username, p) for p in platforms]
        results = await asyncio.gather(*tasks)
        return [
            UsernameCheckResult(platform=str(p).strip().lower(), available=available)
            for p, available in zip(platforms, results)
        ]


async def check_platforms_async(
    username: str,
    platforms: list[str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[UsernameCheckResult]:
    """
    Convenience function for checking platforms without managing client lifecycle.

    Args:
        username: Username to look for
        platforms: Platform keys to check (default: all supported)
        timeout: Request timeout in seconds

    Returns:
        List of UsernameCheckResult objects in request order
    """
    async with AsyncSocialUsernameChecker(timeout=timeout) as checker:
        return await checker.check_platforms(username, platforms)
