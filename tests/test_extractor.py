"""
Tests for the in-page extraction call. The page is faked; only the contract with
page.evaluate is checked here.
"""

from contextlib import asynccontextmanager

import pytest
from playwright.async_api import Error as PlaywrightError

from frame_catalog import config
from frame_catalog.delegates import WebScraperDelegate
from frame_catalog.models import RawItemBundle
from frame_catalog.pipeline import extract_items
from frame_catalog.pipeline.extractor import EXTRACT_ITEMS_JS

from .conftest import FakePage, make_site, row


class TestExtractItems:
    @pytest.mark.asyncio
    async def test_rules_are_sent_to_the_page(self):
        page = FakePage()
        site = make_site("Orgreen", ["https://www.orgreen.com/collections/optical-frames"])

        await extract_items(page, site.rules)

        script, spec = page.evaluate.await_args.args
        assert script == EXTRACT_ITEMS_JS
        assert spec["item"] == ".card"
        assert spec["name"] == {"selector": ".title", "attribute": None, "fallback": None}
        assert spec["image"] == {"selector": "img", "attribute": "src", "fallback": "data-src"}
        assert spec["link"] == {"selector": "a", "attribute": "href", "fallback": None}

    @pytest.mark.asyncio
    async def test_rows_become_bundles_in_page_order(self):
        page = FakePage()
        page.evaluate.return_value = [
            row("Bluebird", "$420", "Navy", "//cdn/b.jpg", "/p/bluebird"),
            "stray text node",
            row("", "$10"),
        ]
        site = make_site("Orgreen", [])

        bundles = await extract_items(page, site.rules)

        assert bundles == [
            RawItemBundle("Bluebird", "$420", "Navy", "//cdn/b.jpg", "/p/bluebird"),
            RawItemBundle("", "$10"),
        ]

    @pytest.mark.asyncio
    async def test_no_item_selector_skips_the_page(self):
        page = FakePage()
        site = make_site("Orgreen", [], item="")

        assert await extract_items(page, site.rules) == []
        page.evaluate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_nothing_returned(self):
        page = FakePage()
        page.evaluate.return_value = None
        assert await extract_items(page, make_site("Orgreen", []).rules) == []


GRID_HTML = """
<html><body>
  <span class="title">Outside any card</span>
  <div class="card">
    <span class="title"> Bluebird </span>
    <span class="price">$420</span>
    <span class="color">Navy</span>
    <img src="//cdn.example/bluebird.jpg" data-src="/lazy/bluebird-small.jpg">
    <a href="/p/bluebird">View</a>
  </div>
  <div class="card">
    <span class="price">$380</span>
    <img data-src="/lazy/kestrel.jpg">
    <a href="/p/kestrel">View</a>
  </div>
</body></html>
"""


@asynccontextmanager
async def rendered(html):
    """A real Chromium page holding `html`; skips the test when no browser is installed."""
    scraper = WebScraperDelegate(user_agent=config.USER_AGENT, viewport=config.VIEWPORT)
    try:
        await scraper.__aenter__()
    except PlaywrightError as e:
        pytest.skip(f"Chromium is not available: {e}")
    try:
        async with scraper.open_page() as page:
            await page.set_content(html)
            yield page
    finally:
        await scraper.__aexit__(None, None, None)


class TestExtractItemsInBrowser:
    @pytest.mark.asyncio
    async def test_fields_read_within_each_card(self):
        site = make_site("Orgreen", [])

        async with rendered(GRID_HTML) as page:
            bundles = await extract_items(page, site.rules)

        assert bundles == [
            RawItemBundle("Bluebird", "$420", "Navy", "//cdn.example/bluebird.jpg", "/p/bluebird"),
            RawItemBundle("", "$380", "", "/lazy/kestrel.jpg", "/p/kestrel"),
        ]

    @pytest.mark.asyncio
    async def test_no_matching_cards(self):
        site = make_site("Orgreen", [], item=".product-tile")

        async with rendered(GRID_HTML) as page:
            assert await extract_items(page, site.rules) == []

    @pytest.mark.asyncio
    async def test_attribute_rule_object(self):
        site = make_site("Orgreen", [], image={"selector": "img", "attribute": "data-src"})

        async with rendered(GRID_HTML) as page:
            bundles = await extract_items(page, site.rules)

        assert [b.image_url for b in bundles] == ["/lazy/bluebird-small.jpg", "/lazy/kestrel.jpg"]
