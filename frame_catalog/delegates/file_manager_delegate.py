# frame_catalog/delegates/file_manager_delegate.py
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import json5

from ..models import SiteConfigError, SiteDescriptor

logger = logging.getLogger(__name__)

class FileManagerDelegate:
    """Handles all file system interactions for the catalog store."""
    def __init__(self, store_path: Path):
        self.store_path = Path(store_path)

    def load_catalog(self) -> List[Dict[str, Any]]:
        """
        Reads the whole catalog. A missing, unreadable or malformed file counts as an empty
        catalog; this never raises.
        """
        if not self.store_path.exists():
            logger.info("No catalog found at %s, starting empty.", self.store_path)
            return []
        try:
            with self.store_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Catalog at %s is not valid JSON (%s), treating it as empty.", self.store_path, e)
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read catalog at %s: %s", self.store_path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Catalog at %s is not a JSON array (got %s), treating it as empty.",
                           self.store_path, type(data).__name__)
            return []
        logger.debug("Loaded %d catalog entries from %s", len(data), self.store_path.name)
        return data

    def save_catalog(self, products: List[Dict[str, Any]]) -> Path:
        """
        Replaces the catalog file in one step: write a sibling temp file, then rename it over the old one.
        The store keeps its previous permissions; a new store gets the usual umask-based mode.
        """
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        mode = self._store_mode()
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.store_path.name}.", suffix=".tmp", dir=self.store_path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(products, f, indent=2, ensure_ascii=False)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.store_path)
        except Exception as e:
            logger.error("Failed to save catalog to %s: %s", self.store_path, e, exc_info=True)
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info("Saved %d products to: %s", len(products), self.store_path)
        return self.store_path

    def _store_mode(self) -> int:
        try:
            return stat.S_IMODE(os.stat(self.store_path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


def load_sites(path: Path) -> List[SiteDescriptor]:
    """Builds site descriptors from a JSON5 file. Enabled brands must have unique names."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json5.load(f)
    except ValueError as e:
        raise SiteConfigError(f"Could not parse site descriptors in {path}: {e}") from e
    if not isinstance(raw, list):
        raise SiteConfigError(f"{path} must contain a list of site descriptors")
    sites = [SiteDescriptor.from_dict(entry) for entry in raw]
    seen = set()
    for site in sites:
        if not site.enabled:
            continue
        if site.brand in seen:
            raise SiteConfigError(f"Duplicate brand name among enabled sites: {site.brand}")
        seen.add(site.brand)
    logger.info("Loaded %d site descriptors (%d enabled) from %s", len(sites), len(seen), path.name)
    return sites
