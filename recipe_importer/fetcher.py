"""
Recipe page fetching.

Pages are fetched through the CORS proxy when it is reachable, with a direct
request as the fallback. AMP helpers live here too since the import pipeline
rewrites AMP URLs before fetching.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests

from recipe_importer import config


class RecipeFetchError(Exception):
    """Raised when a recipe page cannot be fetched."""
    pass


class ProxyError(RecipeFetchError):
    """Raised when the proxy answers with an explicit error payload."""
    pass


class FetchBlockedError(RecipeFetchError):
    """Raised when the site cannot be reached directly (network or cross-origin block)."""
    pass


@dataclass
class FetchedPage:
    html: str
    final_url: str


def is_amp_url(url: str) -> bool:
    """True for ".amp", "/amp/", "?amp" or a path ending in "/amp"."""
    path = urlparse(url).path
    return '.amp' in url or '/amp/' in url or '?amp' in url or path.endswith('/amp')


def strip_amp(url: str) -> str:
    """Rewrite an AMP URL to its regular counterpart."""
    return (
        url.replace('.amp', '', 1)
        .replace('/amp/', '/', 1)
        .replace('/amp', '', 1)
        .replace('?amp', '', 1)
    )


def looks_like_amp_page(html: str) -> bool:
    return '⚡' in html or 'amp-' in html or '<html amp' in html.lower()


class RecipeFetcher:
    """Fetch recipe page HTML, proxy first, then direct."""

    def __init__(
        self,
        proxy_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.proxy_url = (proxy_url or config.PROXY_URL).rstrip('/')
        self.timeout = timeout or config.FETCH_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self, url: str) -> FetchedPage:
        """Fetch *url*, trying the proxy once and then a direct request once.

        Raises:
            ProxyError: The proxy rejected the URL (no direct fallback)
            FetchBlockedError: The direct request could not reach the site
            RecipeFetchError: The site answered with an error status
        """
        page = self._fetch_via_proxy(url)
        if page is not None:
            return page
        return self._fetch_direct(url)

    def _fetch_via_proxy(self, url: str) -> Optional[FetchedPage]:
        try:
            response = self.session.post(
                f"{self.proxy_url}/api/fetch-recipe",
                json={"url": url},
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.info("Proxy not available, trying direct fetch", extra={"url": url, "error": str(e)})
            return None

        if not isinstance(data, dict):
            self.logger.info("Proxy returned unexpected payload, trying direct fetch", extra={"url": url})
            return None

        if response.ok and data.get("success") and data.get("html"):
            self.logger.info("Fetched via proxy server", extra={"url": url})
            return FetchedPage(html=data["html"], final_url=data.get("url") or url)

        if data.get("error"):
            raise ProxyError(str(data["error"]))

        self.logger.info("Proxy fetch failed, trying direct fetch", extra={"url": url, "status": response.status_code})
        return None

    def _fetch_direct(self, url: str) -> FetchedPage:
        headers = {
            "User-Agent": config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise FetchBlockedError(f"Network request failed: {e}") from e
        except requests.RequestException as e:
            raise RecipeFetchError(str(e)) from e

        if not response.ok:
            raise RecipeFetchError(f"HTTP {response.status_code}")

        self.logger.info("Fetched directly", extra={"url": url})
        return FetchedPage(html=response.text, final_url=response.url or url)
