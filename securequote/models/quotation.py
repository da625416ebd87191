"""
Quotation Models - Pydantic models for the quotation record and its projections.

A quotation is stored as a single row. Two read-side projections are derived
from it: the public projection used by list views, and the sensitive
projection carrying the financial and classification fields.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer


# ============================================================================
# Enums
# ============================================================================

class QuotationStatus(str, Enum):
    """Status values for quotations."""
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class RiskLevel(str, Enum):
    """Risk classification of a quotation."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConfidentialityLevel(str, Enum):
    """Confidentiality classification of a quotation."""
    RESTRICTED = "restricted"
    CONFIDENTIAL = "confidential"
    TOP_SECRET = "top_secret"


# Money stays Decimal in Python and goes out as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ============================================================================
# Quotation Models
# ============================================================================

class Quotation(BaseModel):
    """Complete quotation from the quotations table."""
    
    model_config = ConfigDict(from_attributes=True)
    
    id: int
    client_name: str
    reference_number: str
    status: QuotationStatus
    title: str
    description: Optional[str] = None
    
    # Financial data
    buy_price: Money
    sale_price: Money
    margin: Money
    profit: Money
    cost_basis: Money
    markup_percentage: Money
    
    # Classification
    internal_notes: Optional[str] = None
    risk_level: RiskLevel
    confidentiality_level: ConfidentialityLevel
    
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None


class PublicQuotation(BaseModel):
    """Non-sensitive subset of a quotation, safe for list views."""
    
    model_config = ConfigDict(from_attributes=True)
    
    id: int
    client_name: str
    reference_number: str
    status: QuotationStatus
    title: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None


class SensitiveQuotation(BaseModel):
    """Financial and classification subset of a quotation."""
    
    model_config = ConfigDict(from_attributes=True)
    
    id: int
    buy_price: Money
    sale_price: Money
    margin: Money
    profit: Money
    cost_basis: Money
    markup_percentage: Money
    internal_notes: Optional[str] = None
    risk_level: RiskLevel
    confidentiality_level: ConfidentialityLevel


# ============================================================================
# Field sets (column order follows the table definition)
# ============================================================================

QUOTATION_FIELDS = tuple(Quotation.model_fields)
PUBLIC_FIELDS = tuple(PublicQuotation.model_fields)
SENSITIVE_FIELDS = tuple(SensitiveQuotation.model_fields)

# Fields a caller may set on create or update
WRITABLE_FIELDS = tuple(
    name for name in QUOTATION_FIELDS
    if name not in ("id", "created_at", "updated_at")
)

MONEY_FIELDS = (
    "buy_price",
    "sale_price",
    "margin",
    "profit",
    "cost_basis",
    "markup_percentage",
)
