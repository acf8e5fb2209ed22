# frame_catalog/config.py

# Import the 'Path' object for handling file paths in a way that works on any OS (Windows, macOS, Linux)
from pathlib import Path

# --- File Path Settings ---
# The directory where this config.py file is located (the 'frame_catalog' package).
SRC_PATH = Path(__file__).parent
# The 'data' directory one level above the package. The catalog store lives here.
DATA_PATH = SRC_PATH.parent / "data"
# The persisted catalog: a single JSON array of product records, replaced in full on every run.
CACHE_FILE = DATA_PATH / "products.json"
# The site descriptors (one per distributor). JSON5, so comments and trailing commas are allowed.
SITES_FILE = SRC_PATH / "sites.json5"

# --- Browser/Network Settings ---
# The User-Agent string tells the website what kind of browser we are.
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
# The size of the virtual browser window.
VIEWPORT = {"width": 1920, "height": 1080}
HEADLESS = True
# The maximum time (in milliseconds) to wait for a listing page to load before giving up on it.
NAVIGATION_TIMEOUT = 30000 # 30 seconds
# Fixed waits (in milliseconds) used to let JS-heavy grids render and lazy images load.
SETTLE_DELAY = 2000
SCROLL_DELAY = 1000
# Timeout (in seconds) for fetching a product detail page over plain HTTP.
DETAIL_TIMEOUT = 10

# --- Catalog Settings ---
# Scraped products are numbered from here. Manually curated products must use ids below this value.
ID_OFFSET = 1000
# Ids left unused between two brands, so a brand can grow a little without shifting the next one.
ID_GAP = 10
# Used when a site descriptor does not override them.
DEFAULT_MATERIAL = "Unknown"
DEFAULT_WEIGHT = 0
