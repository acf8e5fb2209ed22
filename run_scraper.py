# run_scraper.py
import asyncio
import argparse
import logging
from pathlib import Path

# Import RichHandler here for centralized logging
from rich.logging import RichHandler
from rich.console import Console
from rich.table import Table

# Import the programmatic entry points
from frame_catalog.main import run_scrape, load_cached_catalog


def configure_logging(verbose: bool) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO) # Default level

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(Path("scraper.log"))
    file_handler.setLevel(logging.DEBUG) # Log all debug messages to file
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    rich_handler = RichHandler(
        level=logging.DEBUG if verbose else logging.INFO,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
    )
    root_logger.addHandler(rich_handler)


def print_catalog(products) -> None:
    table = Table(title=f"Catalog ({len(products)} products)")
    for column in ("id", "brand", "name", "type", "color", "shape", "price", "manual"):
        table.add_column(column)
    for p in products:
        table.add_row(*(str(p.get(k, "")) for k in ("id", "brand", "name", "type", "color", "shape", "price", "manual")))
    Console().print(table)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Scrape eyewear distributor sites into the product catalog.")
    parser.add_argument('--sites', type=Path, default=None, help="JSON5 file with site descriptors (default: frame_catalog/sites.json5).")
    parser.add_argument('--store', type=Path, default=None, help="Catalog JSON file (default: data/products.json).")
    parser.add_argument('--list', action='store_true', help="Print the cached catalog instead of scraping.")
    parser.add_argument('--verbose', action='store_true', help="Show debug output on the console.")
    args = parser.parse_args()

    configure_logging(args.verbose)

    if args.list:
        print_catalog(load_cached_catalog(args.store))
        raise SystemExit(0)

    logging.info("=" * 60)
    logging.info("Eyewear catalog scrape starting...")
    logging.info("=" * 60)

    try:
        asyncio.run(run_scrape(store=args.store, sites_path=args.sites))
    except KeyboardInterrupt:
        logging.warning("Scrape interrupted by user.")
    except Exception as e:
        logging.critical("An unexpected error occurred: %s", e, exc_info=True)
    finally:
        logging.info("=" * 60)
        logging.info("Scrape finished.")
