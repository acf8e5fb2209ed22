# frame_catalog/normalizers.py
"""
Best-effort classifiers that turn scraped free text into the catalog's fixed vocabulary.

Every table below is an ordered list of (pattern, result) pairs and the first match wins,
so moving an entry changes how products are classified.
"""
import math
import re
from typing import List, Pattern, Tuple
from urllib.parse import urljoin

from .models import Color, FrameType, Shape

COLOR_KEYWORDS: List[Tuple[str, Color]] = [
    ("black", Color.BLACK),
    ("dark", Color.BLACK),
    ("gold", Color.GOLD),
    ("yellow", Color.GOLD),
    ("silver", Color.SILVER),
    ("chrome", Color.SILVER),
    ("gunmetal", Color.SILVER),
    ("grey", Color.SILVER),
    ("gray", Color.SILVER),
    ("tortoise", Color.TORTOISE),
    ("havana", Color.TORTOISE),
    ("brown", Color.TORTOISE),
    ("blue", Color.BLUE),
    ("navy", Color.BLUE),
]

SHAPE_PATTERNS: List[Tuple[Pattern, Shape]] = [
    (re.compile(r"round|circle|circular"), Shape.ROUND),
    (re.compile(r"aviator|pilot|teardrop"), Shape.AVIATOR),
    (re.compile(r"square|rectangular|angular"), Shape.SQUARE),
]

TYPE_PATTERNS: List[Tuple[Pattern, FrameType]] = [
    (re.compile(r"sun|tinted|polarized|uv"), FrameType.SUNGLASSES),
]

# Swatch colors shown when a product has no photo.
COLOR_HEX = {
    Color.BLACK: "#2C2C2C",
    Color.GOLD: "#D4AF37",
    Color.SILVER: "#C0C0C0",
    Color.TORTOISE: "#5C4033",
    Color.BLUE: "#1E3A8A",
}
DEFAULT_HEX = "#2C2C2C"

_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def normalize_color(raw: str = "") -> Color:
    lower = (raw or "").lower()
    for keyword, color in COLOR_KEYWORDS:
        if keyword in lower:
            return color
    return Color.BLACK


def detect_shape(name: str = "", description: str = "") -> Shape:
    """Guess the frame shape from the product name and description."""
    text = f"{name or ''} {description or ''}".lower()
    for pattern, shape in SHAPE_PATTERNS:
        if pattern.search(text):
            return shape
    return Shape.RECT


def detect_type(name: str = "", description: str = "", category: str = "") -> FrameType:
    """Sunglasses if any sun/tint keyword shows up in the name, description or category (often the listing URL)."""
    text = f"{name or ''} {description or ''} {category or ''}".lower()
    for pattern, frame_type in TYPE_PATTERNS:
        if pattern.search(text):
            return frame_type
    return FrameType.OPTICAL


def parse_price(raw: str = "") -> int:
    """
    Returns the first number in the text rounded half-up to a whole unit, or 0 if there is none.
    Thousands separators are stripped first, so "1,299.50" gives 1300.
    """
    match = _NUMBER.search((raw or "").replace(",", ""))
    if not match:
        return 0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def image_color(color: Color) -> str:
    return COLOR_HEX.get(color, DEFAULT_HEX)


def absolute_url(raw: str, base: str = "") -> str:
    """
    Protocol-relative links get https, relative ones are resolved against the page they came from.
    A link that cannot be parsed (e.g. "http://[broken") is dropped and yields "".
    """
    raw = (raw or "").strip()
    if not raw:
        return ""
    if raw.startswith("//"):
        return "https:" + raw
    try:
        return urljoin(base, raw) if base else raw
    except ValueError:
        return ""
