# frame_catalog/models/catalog_models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class Color(str, Enum):
    BLACK = "Black"
    GOLD = "Gold"
    SILVER = "Silver"
    TORTOISE = "Tortoise"
    BLUE = "Blue"


class Shape(str, Enum):
    ROUND = "round"
    AVIATOR = "aviator"
    SQUARE = "square"
    RECT = "rect"


class FrameType(str, Enum):
    OPTICAL = "Optical"
    SUNGLASSES = "Sunglasses"


class SiteConfigError(ValueError):
    """Raised when a site descriptor cannot be built from its configuration."""


@dataclass
class FieldRule:
    """
    Where to read one field inside a product container.

    An empty selector means the site does not expose the field; reading it yields "".
    With no attribute the element's trimmed text is read.
    """
    selector: str = ""
    attribute: Optional[str] = None
    fallback_attribute: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union[None, str, Mapping[str, Any]], attribute: Optional[str] = None,
                   fallback_attribute: Optional[str] = None) -> "FieldRule":
        if value is None:
            return cls("", attribute, fallback_attribute)
        if isinstance(value, str):
            return cls(value.strip(), attribute, fallback_attribute)
        if isinstance(value, Mapping):
            return cls(
                selector=str(value.get("selector") or "").strip(),
                attribute=value.get("attribute", attribute),
                fallback_attribute=value.get("fallback", fallback_attribute),
            )
        raise SiteConfigError(f"Field rule must be a selector string or an object, got {type(value).__name__}")

    def to_js(self) -> Dict[str, Optional[str]]:
        return {"selector": self.selector, "attribute": self.attribute, "fallback": self.fallback_attribute}


@dataclass
class FieldRules:
    item: str
    name: FieldRule = field(default_factory=FieldRule)
    price: FieldRule = field(default_factory=FieldRule)
    color: FieldRule = field(default_factory=FieldRule)
    image: FieldRule = field(default_factory=lambda: FieldRule("", "src", "data-src"))
    link: FieldRule = field(default_factory=lambda: FieldRule("", "href"))
    # Read from the product detail page, not the listing. Empty skips the detail page.
    description: FieldRule = field(default_factory=FieldRule)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldRules":
        item = data.get("item") or data.get("productItem") or ""
        if not isinstance(item, str):
            raise SiteConfigError("'item' selector must be a string")
        return cls(
            item=item.strip(),
            name=FieldRule.from_value(data.get("name")),
            price=FieldRule.from_value(data.get("price")),
            color=FieldRule.from_value(data.get("color")),
            image=FieldRule.from_value(data.get("image", data.get("imageUrl")), "src", "data-src"),
            link=FieldRule.from_value(data.get("link", data.get("productLink")), "href"),
            description=FieldRule.from_value(data.get("description")),
        )


@dataclass
class StaticOverrides:
    """Values that cannot be inferred from a listing and are taken as given."""
    material: Optional[str] = None
    weight: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "StaticOverrides":
        data = data or {}
        if not isinstance(data, Mapping):
            raise SiteConfigError(f"'overrides' must be an object, got {type(data).__name__}")
        weight = data.get("weight")
        if weight is not None:
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise SiteConfigError(f"Override 'weight' must be a number, got {weight!r}")
            if weight < 0:
                raise SiteConfigError(f"Override 'weight' must not be negative, got {weight!r}")
        material = data.get("material")
        return cls(material=str(material) if material is not None else None, weight=weight)


@dataclass
class SiteDescriptor:
    """One distributor: which listing pages to crawl and how to read its product grid."""
    brand: str
    urls: List[str]
    rules: FieldRules
    overrides: StaticOverrides = field(default_factory=StaticOverrides)
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SiteDescriptor":
        if not isinstance(data, Mapping):
            raise SiteConfigError(f"Site descriptor must be an object, got {type(data).__name__}")
        brand = str(data.get("brand") or "").strip()
        if not brand:
            raise SiteConfigError("Site descriptor is missing a brand name")
        urls = data.get("urls", [])
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise SiteConfigError(f"'urls' for {brand} must be a list of strings")
        rules = data.get("selectors", data.get("rules")) or {}
        if not isinstance(rules, Mapping):
            raise SiteConfigError(f"'selectors' for {brand} must be an object")
        return cls(
            brand=brand,
            urls=[u.strip() for u in urls if u.strip()],
            rules=FieldRules.from_dict(rules),
            overrides=StaticOverrides.from_dict(data.get("overrides")),
            enabled=bool(data.get("enabled", True)),
        )


@dataclass
class RawItemBundle:
    """Unnormalized values read from one product container. Never persisted."""
    name: str = ""
    price: str = ""
    color: str = ""
    image_url: str = ""
    product_url: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RawItemBundle":
        def text(key: str) -> str:
            value = row.get(key)
            return value.strip() if isinstance(value, str) else ""

        return cls(
            name=text("name"),
            price=text("price"),
            color=text("color"),
            image_url=text("imageUrl"),
            product_url=text("productUrl"),
        )


@dataclass
class ProductRecord:
    """
    A scraped product as stored in the catalog file.

    Serialized with the camelCase keys the catalog consumers read. Manually curated
    entries never pass through this class; they are kept as the raw mappings loaded
    from the store.
    """
    id: int
    brand: str
    name: str
    type: FrameType
    color: Color
    price: int
    shape: Shape
    image_color: str
    image_url: str
    material: str
    weight: float
    source_url: str
    scraped_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "brand": self.brand,
            "name": self.name,
            "type": self.type.value,
            "color": self.color.value,
            "price": self.price,
            "shape": self.shape.value,
            "imageColor": self.image_color,
            "imageUrl": self.image_url,
            "material": self.material,
            "weight": self.weight,
            "sourceUrl": self.source_url,
            "scrapedAt": self.scraped_at,
        }
