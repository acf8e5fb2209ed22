# frame_catalog/delegates/downloader_delegate.py
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from ..models import FieldRule

logger = logging.getLogger(__name__)

class DownloaderDelegate:
    """Fetches product detail pages over plain HTTP to read fields the listing grid does not show."""
    def __init__(self, user_agent: str, timeout: float = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None # Will be initialized in __aenter__

    async def __aenter__(self):
        self.client = httpx.AsyncClient(headers={"User-Agent": self.user_agent}, follow_redirects=True)
        logger.debug("DownloaderDelegate httpx.AsyncClient initialized.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            logger.debug("DownloaderDelegate httpx.AsyncClient closed.")

    async def download_html(self, url: str) -> Optional[str]:
        if not self.client:
            logger.error("HTTP client not initialized. Cannot download %s.", url)
            return None
        try:
            response = await self.client.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            logger.warning("HTTP error downloading %s: %s", url, e)
        except httpx.RequestError as e:
            logger.warning("Network error downloading %s: %s", url, e)
        return None

    async def fetch_field(self, url: str, rule: FieldRule) -> str:
        """Downloads a detail page and reads one field from it. Any failure yields ""."""
        if not url or not rule.selector:
            return ""
        html = await self.download_html(url)
        if not html:
            return ""
        return read_field(html, rule)


def read_field(html: str, rule: FieldRule) -> str:
    soup = BeautifulSoup(html, "lxml")
    node = soup.select_one(rule.selector)
    if node is None:
        return ""
    if rule.attribute:
        value = node.get(rule.attribute) or (node.get(rule.fallback_attribute) if rule.fallback_attribute else None)
        return str(value or "").strip()
    return node.get_text(" ", strip=True)
