# frame_catalog/pipeline/extractor.py
import logging
from typing import Any, List

from ..models import FieldRules, RawItemBundle

logger = logging.getLogger(__name__)

# Runs inside the page. Every field is looked up inside its own product container,
# so one product's name can never be read from a neighbouring card.
EXTRACT_ITEMS_JS = """
(spec) => {
    const read = (node, rule) => {
        if (!rule || !rule.selector) return '';
        const el = node.querySelector(rule.selector);
        if (!el) return '';
        if (!rule.attribute) return (el.textContent || '').trim();
        let value = el.getAttribute(rule.attribute) || '';
        if (!value && rule.fallback) value = el.getAttribute(rule.fallback) || '';
        return value.trim();
    };
    return Array.from(document.querySelectorAll(spec.item)).map(node => ({
        name:       read(node, spec.name),
        price:      read(node, spec.price),
        color:      read(node, spec.color),
        imageUrl:   read(node, spec.image),
        productUrl: read(node, spec.link),
    }));
}
"""


async def extract_items(page: Any, rules: FieldRules) -> List[RawItemBundle]:
    """Reads one raw bundle per product container on an already rendered page."""
    if not rules.item:
        logger.debug("No item selector configured, nothing to extract.")
        return []
    spec = {
        "item": rules.item,
        "name": rules.name.to_js(),
        "price": rules.price.to_js(),
        "color": rules.color.to_js(),
        "image": rules.image.to_js(),
        "link": rules.link.to_js(),
    }
    rows = await page.evaluate(EXTRACT_ITEMS_JS, spec)
    return [RawItemBundle.from_row(row) for row in rows or [] if isinstance(row, dict)]
