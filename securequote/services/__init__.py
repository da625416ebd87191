"""
Services package for SecureQuote API.
"""

from .quotation_store import (
    QuotationStore,
    get_quotation_store,
)
from .quotation_service import (
    QuotationService,
    get_quotation_service,
    reset_quotation_service,
)

__all__ = [
    "QuotationStore",
    "get_quotation_store",
    "QuotationService",
    "get_quotation_service",
    "reset_quotation_service",
]
