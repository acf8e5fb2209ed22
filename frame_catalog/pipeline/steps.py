# frame_catalog/pipeline/steps.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .. import config
from ..delegates import DownloaderDelegate, FileManagerDelegate, WebScraperDelegate
from ..models import ProductRecord, RawItemBundle, SiteDescriptor
from ..normalizers import (
    absolute_url,
    detect_shape,
    detect_type,
    image_color,
    normalize_color,
    parse_price,
)
from .extractor import extract_items

logger = logging.getLogger(__name__)


class IdAllocator:
    """
    Hands out product ids for one run.

    Each brand gets a contiguous block; after a brand finishes, `gap` ids are skipped
    so the next brand's block does not move when the previous one grows slightly.
    """
    def __init__(self, start: int = config.ID_OFFSET, gap: int = config.ID_GAP):
        self.next_id = start
        self.gap = gap

    def advance(self, produced: int) -> int:
        self.next_id += produced + self.gap
        return self.next_id


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_record(bundle: RawItemBundle, site: SiteDescriptor, listing_url: str, product_id: int,
                 description: str = "", scraped_at: Optional[str] = None) -> ProductRecord:
    """Normalizes one raw bundle into a product record."""
    color = normalize_color(bundle.color)
    overrides = site.overrides
    return ProductRecord(
        id=product_id,
        brand=site.brand,
        name=bundle.name,
        type=detect_type(bundle.name, description, listing_url),
        color=color,
        price=parse_price(bundle.price),
        shape=detect_shape(bundle.name, description),
        image_color=image_color(color),
        image_url=absolute_url(bundle.image_url, listing_url),
        material=overrides.material or config.DEFAULT_MATERIAL,
        weight=overrides.weight or config.DEFAULT_WEIGHT,
        source_url=absolute_url(bundle.product_url, listing_url) or listing_url,
        scraped_at=scraped_at or _utc_timestamp(),
    )


async def crawl_site(web_scraper: WebScraperDelegate, site: SiteDescriptor, start_id: int,
                     downloader: Optional[DownloaderDelegate] = None) -> Tuple[List[ProductRecord], int]:
    """
    Crawls every listing page of one site, strictly in order, and returns the records
    with how many were produced. Ids run from `start_id` without gaps.

    A page that fails to load or extract is logged and contributes nothing; the
    remaining pages are still crawled. Nothing is retried.
    """
    logger.info("[bold blue]Scraping %s[/bold blue] (%d listing pages)", site.brand, len(site.urls))
    records: List[ProductRecord] = []
    next_id = start_id

    for url in site.urls:
        logger.info("  -> Scraping %s", url)
        page_records: List[ProductRecord] = []
        try:
            async with web_scraper.open_page() as page:
                await web_scraper.load_listing(page, url)
                items = await extract_items(page, site.rules)
                logger.info("     Found %d items", len(items))

                for item in items:
                    if not item.name:
                        continue
                    description = ""
                    if downloader and site.rules.description.selector and item.product_url:
                        detail_url = absolute_url(item.product_url, url)
                        description = await downloader.fetch_field(detail_url, site.rules.description)
                    page_records.append(build_record(item, site, url, next_id + len(page_records), description))
        except Exception as e:
            logger.warning("Failed to scrape %s: %s", url, e)
            continue

        records.extend(page_records)
        next_id += len(page_records)

    logger.info("Scraped %d products for %s", len(records), site.brand)
    return records, len(records)


def reconcile_catalog(scraped: List[ProductRecord], file_manager: FileManagerDelegate) -> List[Dict[str, Any]]:
    """
    Replaces every previously scraped product with this run's products and keeps
    manually curated entries (those with `"manual": true`) exactly as they were.
    The merged catalog is written back in full and returned.
    """
    existing = file_manager.load_catalog()
    manual = [p for p in existing if isinstance(p, dict) and p.get("manual") is True]
    logger.info("Keeping %d manual products, replacing %d previously scraped ones.",
                len(manual), len(existing) - len(manual))

    fresh = [record.to_dict() for record in scraped]
    scraped_ids = {p["id"] for p in fresh}
    clashes = sorted(p["id"] for p in manual if isinstance(p.get("id"), int) and p["id"] in scraped_ids)
    if clashes:
        logger.warning("Manual products share ids with scraped ones: %s. Keep manual ids below %d.",
                       clashes, config.ID_OFFSET)

    merged = manual + fresh
    file_manager.save_catalog(merged)
    return merged
