"""
Validation of AI-extracted product lists.

One malformed record (a mistyped price, a negative quantity) must not discard
an otherwise useful extraction, so records are validated one by one: valid
ones are kept, invalid ones are logged and dropped. Only an input that was
non-empty but produced no valid record at all fails the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List

from pydantic import ValidationError

from domain.canonical import CandidateProduct
from domain.errors import InvalidFormat, ValidationFailure

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    products: List[CandidateProduct] = field(default_factory=list)
    rejected: int = 0


def validate_products(raw: Any) -> ValidationResult:
    """
    Validate parsed model output against the CandidateProduct schema.

    Raises:
        InvalidFormat: If `raw` is not a list
        ValidationFailure: If `raw` is non-empty and no element is valid
    """
    if not isinstance(raw, list):
        raise InvalidFormat("AI response was not a list of products")

    result = ValidationResult()
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Dropping AI record %d: expected an object, got %s", index, type(item).__name__)
            result.rejected += 1
            continue
        try:
            result.products.append(CandidateProduct.model_validate(item))
        except ValidationError as e:
            logger.warning("Dropping AI record %d: %s", index, e.errors(include_url=False))
            result.rejected += 1

    if raw and not result.products:
        raise ValidationFailure(
            f"None of the {len(raw)} extracted products passed validation. "
            "Please verify the file content."
        )

    if result.rejected:
        logger.warning("Kept %d of %d AI records", len(result.products), len(raw))
    return result
