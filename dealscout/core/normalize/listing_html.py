"""
Tolerant listing extractor (search-result HTML → ListingCandidate).

Listing sites change markup constantly, so extraction is table-driven:
  - CONTAINER_SELECTORS find repeated listing cards (fixed priority order)
  - FIELD_RULES map (field, selector) pairs; first non-empty match per field wins
New layouts are supported by adding rows, not control flow.

Acceptance: non-empty title AND more than 4 price digits (drops "$950/mo",
"3 beds" and other partial prices). Duplicates and the collection cap are
handled by ListingCollector.
"""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

from dealscout.schemas.models import ListingCandidate

from .location import extract_location

# ---------- Selector tables ----------

CONTAINER_SELECTORS: tuple[str, ...] = (
    '[data-testid*="property"]',
    '[data-testid*="listing"]',
    ".property-card",
    ".property-tile",
    ".listing-card",
    ".search-result",
    ".PropertyCard",
    ".srp-item",
)

FIELD_RULES: tuple[tuple[str, str], ...] = (
    ("title", '[data-testid*="address"]'),
    ("title", '[data-testid*="property-address"]'),
    ("title", ".property-address"),
    ("title", ".property-address-full"),
    ("title", "h2 a"),
    ("title", "h3 a"),
    ("title", ".address"),
    ("title", 'a[data-rf-test-id="property-link"]'),
    ("price", '[data-testid*="price"]'),
    ("price", ".property-price"),
    ("price", ".price"),
    ("price", ".PropertyCard__price"),
    ("price", ".srp-item-price"),
)

TITLE_SELECTORS = tuple(sel for field, sel in FIELD_RULES if field == "title")
PRICE_SELECTORS = tuple(sel for field, sel in FIELD_RULES if field == "price")
_FIELDS = frozenset(field for field, _ in FIELD_RULES)

MIN_PRICE_DIGITS = 5
MAX_TITLE_LEN = 100

# ---------- Helpers ----------


def _text(el: Tag | None) -> str:
    if el is None:
        return ""
    return " ".join(el.get_text(" ", strip=True).split())


def digits_only(text: str) -> str:
    return "".join(ch for ch in text if ch.isdigit())


def _match_fields(elem: Tag) -> dict[str, str]:
    """Walk FIELD_RULES in order; stop once every field has a value."""
    found: dict[str, str] = {}
    for field, selector in FIELD_RULES:
        if field in found:
            continue
        value = _text(elem.select_one(selector))
        if value:
            found[field] = value
            if len(found) == len(_FIELDS):
                break
    return found


def resolve_link(elem: Tag, page_url: str) -> str:
    """First anchor href under the card, absolutized; the page URL when missing or unusable."""
    anchor = elem if elem.name == "a" else elem.find("a")
    href = anchor.get("href") if isinstance(anchor, Tag) else None
    if not isinstance(href, str) or not href.strip():
        return page_url
    try:
        full = urljoin(page_url, href.strip())
    except ValueError:
        return page_url
    if urlsplit(full).scheme not in ("http", "https"):
        return page_url
    return full


def title_key(cand: ListingCandidate) -> str:
    """Dedup key: the full listing text, since `title` is cut to MAX_TITLE_LEN."""
    return " ".join((cand.address or cand.title).split()).lower()


# ---------- Public API ----------


def extract_candidates(html: str, page_url: str) -> Iterator[ListingCandidate]:
    """
    Yield accepted candidates in document order, container selector by
    container selector. The same card may be yielded more than once when it
    matches several container selectors; ListingCollector drops the repeats.
    """
    soup = BeautifulSoup(html, "lxml")
    for container in CONTAINER_SELECTORS:
        for elem in soup.select(container):
            fields = _match_fields(elem)
            title = fields.get("title", "")
            price = digits_only(fields.get("price", ""))
            if not title or len(price) < MIN_PRICE_DIGITS:
                continue
            yield ListingCandidate(
                title=title[:MAX_TITLE_LEN],
                price_text=price,
                address=title,
                source_url=page_url,
                resolved_url=resolve_link(elem, page_url),
            )


def make_placeholder(page_url: str, query: str) -> ListingCandidate:
    """Stand-in candidate so downstream stages always have one item to reason about."""
    area = extract_location(query, default=None) or "your area"
    return ListingCandidate(
        title=f"Properties in {area}"[:MAX_TITLE_LEN],
        price_text="0",
        address=page_url,
        source_url=page_url,
        resolved_url=page_url,
        placeholder=True,
    )


class ListingCollector:
    """
    Insertion-ordered, capped, de-duplicated candidate list.

    A candidate is a duplicate when its normalized full title (case-insensitive)
    or its resolved URL was already accepted. First seen wins; adds past the
    cap are no-ops.
    """

    def __init__(self, cap: int = 20) -> None:
        self.cap = cap
        self._items: list[ListingCandidate] = []
        self._titles: set[str] = set()
        self._urls: set[str] = set()

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.cap

    @property
    def items(self) -> list[ListingCandidate]:
        return list(self._items)

    def is_duplicate(self, cand: ListingCandidate) -> bool:
        return title_key(cand) in self._titles or cand.resolved_url in self._urls

    def add(self, cand: ListingCandidate) -> bool:
        if self.is_full or self.is_duplicate(cand):
            return False
        self._items.append(cand)
        self._titles.add(title_key(cand))
        self._urls.add(cand.resolved_url)
        return True

    def collect_page(self, html: str, page_url: str) -> int:
        """Scan one page into the collection. Returns how many candidates were added."""
        added = 0
        for cand in extract_candidates(html, page_url):
            if self.is_full:
                break
            if self.add(cand):
                added += 1
        return added


__all__ = [
    "CONTAINER_SELECTORS",
    "FIELD_RULES",
    "TITLE_SELECTORS",
    "PRICE_SELECTORS",
    "ListingCollector",
    "digits_only",
    "extract_candidates",
    "make_placeholder",
    "resolve_link",
    "title_key",
]
