"""
Header matching for wholesaler price lists.

Wholesalers label the same column in many ways ("Rate", "Net Rate" and
"Dealer Price" all mean purchase price), so every canonical field has a ranked
list of known header spellings. Matching runs in two phases: an exact pass on
normalized headers, then a substring pass ("contains or is contained by") only
when nothing matched exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection, Dict, Optional, Sequence, Tuple

_HEADER_NOISE = re.compile(r"[\s._\-()]+")

RULE_EXACT = "exact"
RULE_FUZZY = "fuzzy"
RULE_AUTO = "auto"


@dataclass(frozen=True)
class HeaderMatch:
    """Which source column was chosen for a field, and by which rule."""

    column: str
    candidate: Optional[str]
    rule: str


# Most-preferred spelling first; values are already in normalized form.
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "name": (
        "name",
        "productname",
        "itemname",
        "product",
        "item",
        "itemdescription",
        "productdescription",
        "particulars",
        "materialdescription",
        "description",
    ),
    "purchase_price": (
        "purchaseprice",
        "purchaserate",
        "purchase",
        "rate",
        "netrate",
        "dealerprice",
        "dealerrate",
        "costprice",
        "cost",
        "wholesaleprice",
        "wholesalerate",
        "buyingprice",
        "tradeprice",
    ),
    "selling_price": (
        "sellingprice",
        "sellingrate",
        "saleprice",
        "salerate",
        "sellprice",
        "retailprice",
        "unitprice",
        "price",
    ),
    "mrp_price": (
        "mrp",
        "mrpprice",
        "mrprate",
        "maximumretailprice",
    ),
    "without_tax_price": (
        "withouttaxprice",
        "pricewithouttax",
        "withouttax",
        "pretaxprice",
        "pricebeforetax",
        "taxableprice",
        "basicprice",
        "basicrate",
        "exgst",
        "exclgst",
    ),
    "barcode": (
        "barcode",
        "eancode",
        "ean",
        "upc",
        "gtin",
    ),
    "item_code": (
        "itemcode",
        "itemno",
        "itemnumber",
        "articlecode",
        "articleno",
    ),
    "product_id": (
        "productid",
        "productcode",
        "sku",
        "skucode",
        "partno",
        "partnumber",
        "modelno",
        "catalogueno",
        "code",
    ),
    "stock_qty": (
        "stockqty",
        "stockquantity",
        "qty",
        "quantity",
        "stock",
        "availableqty",
        "closingstock",
    ),
    "packing_final_price": (
        "packingfinalprice",
        "finalprice",
        "packingprice",
        "packprice",
        "finalrate",
    ),
    "packing_inner": (
        "packinginner",
        "innerpacking",
        "innerpack",
        "inner",
        "stdpacking",
        "stdpack",
        "packsize",
        "packing",
    ),
    "unit": (
        "unit",
        "uom",
        "units",
        "unitofmeasure",
        "unitofmeasurement",
    ),
    "category": (
        "category",
        "categoryname",
        "productcategory",
        "productgroup",
        "itemgroup",
        "group",
    ),
    "supplier": (
        "supplier",
        "suppliername",
        "vendor",
        "vendorname",
        "brand",
        "manufacturer",
        "company",
        "make",
    ),
    "description": (
        "description",
        "itemdescription",
        "productdescription",
        "details",
        "specification",
        "remarks",
    ),
}

PRICE_FIELDS: Tuple[str, ...] = ("purchase_price", "selling_price", "mrp_price", "without_tax_price")

OPTIONAL_FIELDS: Tuple[str, ...] = (
    "barcode",
    "item_code",
    "product_id",
    "stock_qty",
    "packing_final_price",
    "packing_inner",
    "unit",
    "category",
    "supplier",
    "description",
)


def normalize_header(header: object) -> str:
    """Lower-case and drop whitespace and . _ - ( ) characters."""
    if header is None:
        return ""
    return _HEADER_NOISE.sub("", str(header).lower())


def _available(headers: Sequence[str], exclude: Collection[str]) -> list[tuple[str, str]]:
    pairs = []
    for header in headers:
        if header in exclude:
            continue
        normalized = normalize_header(header)
        if normalized:
            pairs.append((header, normalized))
    return pairs


def find_exact(
    headers: Sequence[str],
    candidates: Sequence[str],
    exclude: Collection[str] = (),
) -> Optional[HeaderMatch]:
    pairs = _available(headers, exclude)
    for candidate in candidates:
        wanted = normalize_header(candidate)
        for header, normalized in pairs:
            if normalized == wanted:
                return HeaderMatch(column=header, candidate=candidate, rule=RULE_EXACT)
    return None


def find_fuzzy(
    headers: Sequence[str],
    candidates: Sequence[str],
    exclude: Collection[str] = (),
) -> Optional[HeaderMatch]:
    pairs = _available(headers, exclude)
    for candidate in candidates:
        wanted = normalize_header(candidate)
        if not wanted:
            continue
        for header, normalized in pairs:
            if wanted in normalized or normalized in wanted:
                return HeaderMatch(column=header, candidate=candidate, rule=RULE_FUZZY)
    return None


def find_column(
    headers: Sequence[str],
    candidates: Sequence[str],
    exclude: Collection[str] = (),
) -> Optional[HeaderMatch]:
    """
    Return the header matching the most-preferred candidate, or None.

    Args:
        headers: Actual column labels, in source order
        candidates: Known spellings for one field, most-preferred first
        exclude: Labels already claimed by other fields

    Returns:
        HeaderMatch for the first exact hit; otherwise for the first substring
        hit; otherwise None
    """
    return find_exact(headers, candidates, exclude) or find_fuzzy(headers, candidates, exclude)
