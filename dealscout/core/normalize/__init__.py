# dealscout/core/normalize/__init__.py
from .listing_html import CONTAINER_SELECTORS, PRICE_SELECTORS, TITLE_SELECTORS, ListingCollector, extract_candidates
from .location import DEFAULT_LOCATION, extract_location

__all__ = [
    "CONTAINER_SELECTORS",
    "DEFAULT_LOCATION",
    "ListingCollector",
    "PRICE_SELECTORS",
    "TITLE_SELECTORS",
    "extract_candidates",
    "extract_location",
]
