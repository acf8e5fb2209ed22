# frame_catalog/pipeline/__init__.py

# This file makes the step functions directly available from the 'pipeline' package.
from .extractor import extract_items
from .steps import IdAllocator, build_record, crawl_site, reconcile_catalog
