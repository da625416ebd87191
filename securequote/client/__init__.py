"""
Client package for SecureQuote API: HTTP client plus list and detail views.
"""

from .api_client import QuotationClient
from .views import DetailState, QuotationDetailView, QuotationListView

__all__ = [
    "QuotationClient",
    "DetailState",
    "QuotationDetailView",
    "QuotationListView",
]
