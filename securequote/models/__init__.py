"""
Models package for SecureQuote API.
"""

# Quotation models
from .quotation import (
    Quotation,
    PublicQuotation,
    SensitiveQuotation,
    QuotationStatus,
    RiskLevel,
    ConfidentialityLevel,
    QUOTATION_FIELDS,
    PUBLIC_FIELDS,
    SENSITIVE_FIELDS,
    WRITABLE_FIELDS,
    MONEY_FIELDS,
)

# API models
from .api import (
    CreateQuotationRequest,
    UpdateQuotationRequest,
    QuotationIdRequest,
    HealthCheckResponse,
)

__all__ = [
    # Quotation
    "Quotation",
    "PublicQuotation",
    "SensitiveQuotation",
    "QuotationStatus",
    "RiskLevel",
    "ConfidentialityLevel",
    "QUOTATION_FIELDS",
    "PUBLIC_FIELDS",
    "SENSITIVE_FIELDS",
    "WRITABLE_FIELDS",
    "MONEY_FIELDS",
    # API
    "CreateQuotationRequest",
    "UpdateQuotationRequest",
    "QuotationIdRequest",
    "HealthCheckResponse",
]
