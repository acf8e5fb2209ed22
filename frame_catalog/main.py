# frame_catalog/main.py
import asyncio
import logging
import weakref
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .delegates import DownloaderDelegate, FileManagerDelegate, WebScraperDelegate, load_sites
from .models import ProductRecord, SiteDescriptor
from .pipeline import IdAllocator, crawl_site, reconcile_catalog

logger = logging.getLogger(__name__)

# Whole runs are serialized so two scrapes never interleave their read and write of the store.
# asyncio locks belong to one event loop, so each loop gets its own.
_run_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = weakref.WeakKeyDictionary()


def _run_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _run_locks.get(loop)
    if lock is None:
        lock = _run_locks[loop] = asyncio.Lock()
    return lock


async def run_scrape(sites: Optional[List[SiteDescriptor]] = None, store: Optional[Path] = None,
                     sites_path: Optional[Path] = None, web_scraper: Optional[WebScraperDelegate] = None,
                     downloader: Optional[DownloaderDelegate] = None) -> List[Dict[str, Any]]:
    """
    Scrapes every enabled site in order and merges the results into the catalog store.

    Returns the merged catalog (manual products first, then this run's products).
    One browser is shared by the whole run. Failures on a page or a site only cost that
    page or site; a failure to write the store propagates.
    """
    if sites is None:
        sites = load_sites(sites_path or config.SITES_FILE)
    file_manager = FileManagerDelegate(store or config.CACHE_FILE)
    web_scraper = web_scraper or WebScraperDelegate(
        user_agent=config.USER_AGENT,
        viewport=config.VIEWPORT,
        headless=config.HEADLESS,
        navigation_timeout=config.NAVIGATION_TIMEOUT,
        settle_delay=config.SETTLE_DELAY,
        scroll_delay=config.SCROLL_DELAY,
    )
    downloader = downloader or DownloaderDelegate(user_agent=config.USER_AGENT, timeout=config.DETAIL_TIMEOUT)

    async with _run_lock():
        logger.info("Starting scraper...")
        ids = IdAllocator()
        scraped: List[ProductRecord] = []

        async with web_scraper, downloader:
            for site in sites:
                if not site.enabled:
                    logger.info("Skipping %s (disabled)", site.brand)
                    continue
                try:
                    records, produced = await crawl_site(web_scraper, site, ids.next_id, downloader)
                except Exception as e:
                    logger.error("Scraping %s failed: %s", site.brand, e, exc_info=True)
                    records, produced = [], 0
                scraped.extend(records)
                ids.advance(produced)

        merged = reconcile_catalog(scraped, file_manager)
        logger.info("[bold green]Scrape complete.[/bold green] %d products saved to %s",
                    len(scraped), file_manager.store_path.name)
        return merged


def load_cached_catalog(store: Optional[Path] = None) -> List[Dict[str, Any]]:
    """The catalog as last written. Empty if the store is missing or unreadable; never raises."""
    return FileManagerDelegate(store or config.CACHE_FILE).load_catalog()
