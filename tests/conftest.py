"""
Shared fixtures: an in-memory stand-in for the browser delegate and the detail-page
downloader, so the crawl can be exercised without a real browser or network.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Dict, Iterable, List, Optional
from unittest.mock import AsyncMock

import pytest

from frame_catalog.models import SiteDescriptor


class FakePage:
    def __init__(self):
        self.closed = False
        self.evaluate = AsyncMock(return_value=[])


class FakeScraper:
    """Serves canned product rows per listing URL; URLs in `failing` raise on navigation."""

    def __init__(self, pages: Optional[Dict[str, List[dict]]] = None, failing: Iterable[str] = ()):
        self.pages = pages or {}
        self.failing = set(failing)
        self.visited: List[str] = []
        self.opened: List[FakePage] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.exited += 1

    @asynccontextmanager
    async def open_page(self):
        page = FakePage()
        self.opened.append(page)
        try:
            yield page
        finally:
            page.closed = True

    async def load_listing(self, page, url):
        self.visited.append(url)
        await asyncio.sleep(0)
        if url in self.failing:
            raise TimeoutError(f"Timeout 30000ms exceeded navigating to {url}")
        page.evaluate.return_value = self.pages.get(url, [])


class FakeDownloader:
    def __init__(self, description: str = ""):
        self.fetch_field = AsyncMock(return_value=description)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


def row(name, price="", color="", image="", link=""):
    return {"name": name, "price": price, "color": color, "imageUrl": image, "productUrl": link}


def make_site(brand, urls, enabled=True, overrides=None, **selectors):
    rules = {"item": ".card", "name": ".title", "price": ".price", "color": ".color",
             "image": "img", "link": "a"}
    rules.update(selectors)
    return SiteDescriptor.from_dict({
        "brand": brand,
        "enabled": enabled,
        "urls": list(urls),
        "selectors": rules,
        "overrides": overrides or {},
    })


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "products.json"


@pytest.fixture
def manual_products():
    return [
        {"id": 1, "brand": "Lindberg", "name": "Air Titanium Rim", "type": "Optical", "color": "Silver",
         "price": 640, "shape": "round", "manual": True},
        {"manual": True, "id": 7, "name": "Atelier One-off", "extra": {"notes": ["hand finished", 2]},
         "price": 1250.5},
    ]
