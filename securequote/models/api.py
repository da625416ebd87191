"""
API Models - Pydantic models for API requests and responses.

These models define the payloads accepted by the quotation RPC endpoints
and carry the input validation rules for each operation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional, Dict, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
)

from .quotation import QuotationStatus, RiskLevel, ConfidentialityLevel


def _blank_to_none(value: Any) -> Any:
    """Strip optional text and store empty strings as null."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


# ============================================================================
# Field types
# ============================================================================

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]

# NUMERIC(15, 4) columns
PositiveAmount = Annotated[Decimal, Field(gt=0, max_digits=15, decimal_places=4)]
Amount = Annotated[Decimal, Field(max_digits=15, decimal_places=4)]
# NUMERIC(5, 2) column
Percentage = Annotated[Decimal, Field(ge=0, max_digits=5, decimal_places=2)]


# ============================================================================
# Quotation API Models
# ============================================================================

class CreateQuotationRequest(BaseModel):
    """Request payload for creating a quotation."""
    
    model_config = ConfigDict(extra="forbid")
    
    client_name: RequiredText = Field(..., description="Client the quotation is addressed to")
    reference_number: RequiredText = Field(..., description="Human-facing quotation reference")
    status: QuotationStatus = Field(default=QuotationStatus.DRAFT, description="Lifecycle status")
    title: RequiredText = Field(..., description="Quotation title")
    description: OptionalText = Field(default=None, description="Public description")
    buy_price: PositiveAmount = Field(..., description="Purchase price")
    sale_price: PositiveAmount = Field(..., description="Sale price")
    margin: Amount = Field(..., description="Margin amount")
    profit: Amount = Field(..., description="Profit amount")
    cost_basis: PositiveAmount = Field(..., description="Cost basis")
    markup_percentage: Percentage = Field(..., description="Markup in percent")
    internal_notes: OptionalText = Field(default=None, description="Internal notes")
    risk_level: RiskLevel = Field(default=RiskLevel.MEDIUM, description="Risk classification")
    confidentiality_level: ConfidentialityLevel = Field(
        default=ConfidentialityLevel.RESTRICTED,
        description="Confidentiality classification"
    )
    expires_at: Optional[datetime] = Field(default=None, description="Expiry timestamp")


class UpdateQuotationRequest(BaseModel):
    """
    Request payload for a partial quotation update.
    
    Only the fields present in the payload are changed. An explicit null
    clears a nullable field and is rejected for every other field.
    """
    
    model_config = ConfigDict(extra="forbid")
    
    id: int = Field(..., description="Quotation ID")
    client_name: Optional[RequiredText] = None
    reference_number: Optional[RequiredText] = None
    status: Optional[QuotationStatus] = None
    title: Optional[RequiredText] = None
    description: OptionalText = None
    buy_price: Optional[PositiveAmount] = None
    sale_price: Optional[PositiveAmount] = None
    margin: Optional[Amount] = None
    profit: Optional[Amount] = None
    cost_basis: Optional[PositiveAmount] = None
    markup_percentage: Optional[Percentage] = None
    internal_notes: OptionalText = None
    risk_level: Optional[RiskLevel] = None
    confidentiality_level: Optional[ConfidentialityLevel] = None
    expires_at: Optional[datetime] = None
    
    @field_validator(
        "client_name", "reference_number", "status", "title",
        "buy_price", "sale_price", "margin", "profit", "cost_basis",
        "markup_percentage", "risk_level", "confidentiality_level",
    )
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("field cannot be null")
        return value
    
    def changes(self) -> Dict[str, Any]:
        """Return only the fields that were supplied, without the id."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class QuotationIdRequest(BaseModel):
    """Request payload for operations addressing a single quotation."""
    
    model_config = ConfigDict(extra="forbid")
    
    id: int = Field(..., description="Quotation ID")


# ============================================================================
# System API Models
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(..., description="Server status")
    timestamp: datetime = Field(..., description="Server time of the check")
