"""Filter construction for public catalog queries.

Every public query goes through :func:`build_filter` (listings) or
:func:`build_slug_filter` (single product lookup). Both always restrict
results to ``active`` products.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from storefront.catalog.schemas import PRICE_LIMIT, PRICE_QUANTUM

__all__ = [
    "ProductFilter",
    "build_filter",
    "build_slug_filter",
    "fit_price_bound",
    "parse_price_bound",
    "parse_stock_flag",
]

_NAN = Decimal("NaN")


@dataclass(frozen=True)
class ProductFilter:
    """Filter predicate over product documents.

    All set fields are combined with AND. ``active`` is not an init
    argument: public queries can never ask for inactive products.

    Attributes:
        in_stock: Stock state to match, ``None`` for both.
        price_from: Inclusive lower bound on ``pricing.price``.
        price_to: Inclusive upper bound on ``pricing.price``.
        product_type: Category to match.
        slug: Exact slug to match (single product lookup).
    """

    in_stock: bool | None = None
    price_from: Decimal | None = None
    price_to: Decimal | None = None
    product_type: str | None = None
    slug: str | None = None
    active: bool = field(default=True, init=False)

    @property
    def is_satisfiable(self) -> bool:
        """False when a price bound is malformed (NaN or infinite)."""
        return all(
            bound.is_finite()
            for bound in (self.price_from, self.price_to)
            if bound is not None
        )

    @property
    def is_slug_lookup(self) -> bool:
        """Check whether this is the single-product lookup shape."""
        return self.slug is not None

    def matches(self, doc: Mapping[str, Any]) -> bool:
        """Evaluate the predicate against a product document."""
        if not self.is_satisfiable:
            return False
        if doc.get("active") is not True:
            return False
        if self.slug is not None:
            return doc.get("slug") == self.slug
        if self.product_type is not None and doc.get("type") != self.product_type:
            return False
        if self.in_stock is not None and bool(doc.get("inStock")) != self.in_stock:
            return False
        if self.price_from is not None or self.price_to is not None:
            price = (doc.get("pricing") or {}).get("price")
            if price is None:
                return False
            price = Decimal(str(price))
            if self.price_from is not None and price < self.price_from:
                return False
            if self.price_to is not None and price > self.price_to:
                return False
        return True

    def to_where(self) -> dict[str, Any]:
        """Render the predicate as a ``{field: {operator: value}}`` mapping."""
        if self.slug is not None:
            return {
                "and": [
                    {"slug": {"equals": self.slug}},
                    {"active": {"equals": True}},
                ]
            }

        where: dict[str, Any] = {"active": {"equals": True}}
        if self.product_type is not None:
            where["type"] = {"equals": self.product_type}
        if self.in_stock is not None:
            where["inStock"] = {"equals": self.in_stock}
        if self.price_from is not None or self.price_to is not None:
            price: dict[str, float] = {}
            if self.price_from is not None:
                price["greater_than_equal"] = float(self.price_from)
            if self.price_to is not None:
                price["less_than_equal"] = float(self.price_to)
            where["pricing.price"] = price
        return where


def parse_stock_flag(raw: str | None) -> bool | None:
    """Parse ``inStock``; only the exact strings "true"/"false" count."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


def parse_price_bound(raw: str | None) -> Decimal | None:
    """Parse a price bound.

    Missing or blank values mean "no bound". Only plain decimal notation
    is accepted: hex literals, digit separators (``1_000``) and the
    "Infinity" and "NaN" spellings become ``NaN``, which makes the filter
    unsatisfiable.
    """
    if raw is None or not raw.strip():
        return None
    text = raw.strip()
    if "_" in text:
        return _NAN
    try:
        bound = Decimal(text)
    except InvalidOperation:
        return _NAN
    return bound if bound.is_finite() else _NAN


def fit_price_bound(bound: Decimal | None, rounding: str) -> Decimal | None:
    """Fit a bound into the stored price range.

    Stored prices have two decimal places and stay below ``PRICE_LIMIT``,
    so clamping to the range and rounding towards the inside of the
    interval (``ROUND_CEILING`` for lower bounds, ``ROUND_FLOOR`` for upper
    ones) admits exactly the same prices as the raw bound.
    """
    if bound is None or not bound.is_finite():
        return bound
    bound = max(-PRICE_LIMIT, min(bound, PRICE_LIMIT))
    return bound.quantize(PRICE_QUANTUM, rounding=rounding)


def build_filter(params: Mapping[str, str | None]) -> ProductFilter:
    """Translate raw query parameters into a :class:`ProductFilter`.

    Recognised keys: ``inStock``, ``priceFrom``, ``priceTo``, ``type`` and
    ``slug``. A ``slug`` switches to the lookup shape and every other key
    is ignored. ``type`` must already be validated by the caller.

    Args:
        params: Raw query parameters (e.g. ``request.query_params``).

    Returns:
        A fresh filter predicate.
    """
    slug = params.get("slug")
    if slug is not None:
        return build_slug_filter(slug)

    return ProductFilter(
        in_stock=parse_stock_flag(params.get("inStock")),
        price_from=fit_price_bound(parse_price_bound(params.get("priceFrom")), ROUND_CEILING),
        price_to=fit_price_bound(parse_price_bound(params.get("priceTo")), ROUND_FLOOR),
        product_type=params.get("type") or None,
    )


def build_slug_filter(slug: str) -> ProductFilter:
    """Build the ``slug AND active`` lookup predicate."""
    return ProductFilter(slug=slug)
