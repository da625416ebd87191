"""
Error types raised by the quotation service, store and HTTP client.

A missing quotation is not an error: lookups return None and deletes
return False.
"""

from typing import Any, Optional


class QuotationError(Exception):
    """Base class for SecureQuote errors."""


class QuotationValidationError(QuotationError):
    """Input rejected before it reached the store."""
    
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class QuotationStoreError(QuotationError):
    """Unexpected failure talking to the database."""


class QuotationAPIError(QuotationError):
    """Non-successful response or transport failure seen by the HTTP client."""
    
    def __init__(self, status_code: Optional[int], detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}" if status_code else str(detail))
