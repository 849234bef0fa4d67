"""
Models for the tag service.

TagRequest is the immutable domain value handed to the renderer.
TagPDFRequest and HealthResponse define the HTTP API payloads.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import TagValidationError

REQUIRED_FIELDS_MESSAGE = "Product name and SKU are required"


class Currency(str, Enum):
    """Currencies a tag price can be shown in."""

    DEN = "den"
    EURO = "euro"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Currency":
        """Map any input to a currency; only an exact 'euro' selects EURO."""
        if value == cls.EURO.value:
            return cls.EURO
        return cls.DEN


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


@dataclass(frozen=True)
class TagRequest:
    """Field values for a single tag. Optional fields are empty strings when absent."""

    product_name: str
    sku: str
    id1: str = ""
    id2: str = ""
    id3: str = ""
    size: str = ""
    price: str = ""
    currency: Currency = Currency.DEN

    @classmethod
    def create(
        cls,
        product_name: Optional[str],
        sku: Optional[str],
        id1: Optional[str] = None,
        id2: Optional[str] = None,
        id3: Optional[str] = None,
        size: Optional[str] = None,
        price: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> "TagRequest":
        """
        Build a validated TagRequest.

        Raises:
            TagValidationError: product_name or sku is missing or blank
        """
        if _is_blank(product_name) or _is_blank(sku):
            raise TagValidationError(REQUIRED_FIELDS_MESSAGE)

        return cls(
            product_name=product_name,
            sku=sku,
            id1=id1 or "",
            id2=id2 or "",
            id3=id3 or "",
            size=size or "",
            price=price or "",
            currency=Currency.parse(currency),
        )

    @property
    def ids(self) -> Tuple[str, str, str]:
        """The identifier fields in display order, including empty ones."""
        return (self.id1, self.id2, self.id3)


# ============================================================================
# Request/Response Models
# ============================================================================

class TagPDFRequest(BaseModel):
    """Tag field values as posted by the form client."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    productName: Optional[str] = Field(None, description="Product name (required)")
    id1: Optional[str] = Field(None, description="First identifier line")
    id2: Optional[str] = Field(None, description="Second identifier line")
    id3: Optional[str] = Field(None, description="Third identifier line")
    size: Optional[str] = Field(None, description="Size line, e.g. '40×60 cm'")
    price: Optional[str] = Field(None, description="Price, e.g. '6250' or '6.250,00'")
    currency: Optional[str] = Field("den", description="Currency: 'den' or 'euro'")
    sku: Optional[str] = Field(None, description="SKU, printed and encoded as CODE128 (required)")

    def to_tag_request(self) -> TagRequest:
        """Convert to the domain TagRequest, raising TagValidationError on missing fields."""
        return TagRequest.create(
            product_name=self.productName,
            sku=self.sku,
            id1=self.id1,
            id2=self.id2,
            id3=self.id3,
            size=self.size,
            price=self.price,
            currency=self.currency,
        )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime
    active_renders: int
    max_concurrent: int
    renderer_ready: bool = True
    renderer_error: Optional[str] = None
    font_family: Optional[str] = None
    layout_mode: Optional[str] = None
