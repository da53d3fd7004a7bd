"""
CandidateProduct schema definition.

This model is the single product shape produced by both extraction paths
(direct tabular parsing and the AI fallback) and handed back to the caller.
Constraints are enforced at construction time:

- AI output goes through strict validation; a record that breaks any
  constraint is rejected as a whole.
- Tabular rows use `from_tabular`, which treats the constraints as advisory and
  drops only the offending optional fields.

Nothing here is persisted; the caller inserts rows into its own store.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fields.normalization import to_number, to_text

MAX_AMOUNT = 100_000_000
NAME_MAX_CHARS = 500

CANONICAL_FIELDS: Tuple[str, ...] = (
    "name",
    "product_id",
    "category",
    "supplier",
    "purchase_price",
    "selling_price",
    "mrp_price",
    "without_tax_price",
    "stock_qty",
    "unit",
    "barcode",
    "item_code",
    "description",
    "packing_inner",
    "packing_final_price",
)

AMOUNT_FIELDS: Tuple[str, ...] = ("purchase_price", "selling_price", "mrp_price", "without_tax_price")
TEXT_FIELDS: Tuple[str, ...] = (
    "name",
    "product_id",
    "category",
    "supplier",
    "unit",
    "barcode",
    "item_code",
    "description",
    "packing_inner",
)


def _coerce_amount(value: Any) -> Optional[float]:
    """Accept numbers and numeric strings ("₹1,250"); reject everything else."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(value, (int, float)):
        if not math.isfinite(float(value)):
            raise ValueError("expected a finite number")
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        number = to_number(value)
        if number is None:
            raise ValueError(f"not a number: {value[:40]!r}")
        return number
    raise ValueError(f"expected a number, got {type(value).__name__}")


class CandidateProduct(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_CHARS)
    product_id: Optional[str] = Field(default=None, max_length=100)
    category: Optional[str] = Field(default=None, max_length=200)
    supplier: Optional[str] = Field(default=None, max_length=200)

    purchase_price: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    selling_price: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    mrp_price: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    without_tax_price: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)

    stock_qty: Optional[int] = Field(default=None, ge=0, le=MAX_AMOUNT)
    unit: Optional[str] = Field(default=None, max_length=50)
    barcode: Optional[str] = Field(default=None, max_length=100)
    item_code: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    packing_inner: Optional[str] = Field(default=None, max_length=200)
    packing_final_price: Optional[Union[float, str]] = None

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected text, got {type(value).__name__}")
        # numeric codes such as barcodes arrive as JSON numbers
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return to_text(value)

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> Optional[float]:
        return _coerce_amount(value)

    @field_validator("stock_qty", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Optional[int]:
        number = _coerce_amount(value)
        if number is None:
            return None
        if number < 0:
            raise ValueError("stock_qty must be non-negative")
        return int(number)

    @field_validator("packing_final_price", mode="before")
    @classmethod
    def _coerce_packing_price(cls, value: Any) -> Union[float, str, None]:
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            number = to_number(text)
            if number is None:
                if len(text) > 200:
                    raise ValueError("packing_final_price text is longer than 200 characters")
                return text
            value = number
        number = _coerce_amount(value)
        if number is not None and not 0 <= number <= MAX_AMOUNT:
            raise ValueError(f"packing_final_price must be between 0 and {MAX_AMOUNT}")
        return number

    def to_record(self) -> Dict[str, Any]:
        """Dict for the response body, with null-valued fields left out."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_tabular(cls, values: Dict[str, Any]) -> "CandidateProduct":
        """
        Build a product from one spreadsheet row with advisory constraints.

        Optional fields that break a constraint are dropped; a bad name still
        raises ValidationError so the caller can skip the row.
        """
        data = {k: v for k, v in values.items() if v is not None}
        if isinstance(data.get("name"), str):
            data["name"] = data["name"][:NAME_MAX_CHARS]

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            offending = {err["loc"][0] for err in exc.errors() if err.get("loc")}
            if "name" in offending:
                raise
            for field in offending:
                data.pop(field, None)
            return cls.model_validate(data)
