"""
Quotation views.

QuotationListView holds the public list with its local search and status
filters. QuotationDetailView loads the sensitive figures of one quotation
on demand and tells the hosting UI which copy and inspection gestures to
suppress while it is open. Those gestures are UI deterrents only; the
sensitive endpoint itself is not protected by them.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import ValidationError

from securequote.client.formatting import (
    confidentiality_badge,
    format_currency,
    format_date,
    format_percentage,
    risk_badge,
    status_badge,
)
from securequote.errors import QuotationAPIError
from securequote.models import PublicQuotation, QuotationStatus, SensitiveQuotation

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"

# Ctrl/Cmd + key: copy, save, print, select all, view source, dev tools
BLOCKED_SHORTCUT_KEYS = frozenset({"c", "s", "p", "a", "u", "i", "j"})
BLOCKED_KEYS = frozenset({"F12", "PrintScreen"})

CONFIDENTIALITY_NOTICE = (
    "This financial data is strictly confidential and proprietary. "
    "Unauthorized disclosure, reproduction, or distribution is prohibited "
    "and may result in legal action."
)


def matches_search(quotation: PublicQuotation, term: str) -> bool:
    """Case-insensitive substring match on client, title, reference and description"""
    if not term:
        return True
    needle = term.lower()
    haystacks = [quotation.client_name, quotation.title, quotation.reference_number]
    if quotation.description:
        haystacks.append(quotation.description)
    return any(needle in text.lower() for text in haystacks)


def render_card(quotation: PublicQuotation) -> str:
    """Plain-text card for one public quotation"""
    lines = [
        f"{quotation.title}  [{status_badge(quotation.status)}]",
        f"  Client: {quotation.client_name}",
        f"  Ref: {quotation.reference_number}",
    ]
    if quotation.description:
        lines.append(f"  {quotation.description}")
    dates = f"  Created: {format_date(quotation.created_at)}"
    if quotation.expires_at:
        dates += f"  Expires: {format_date(quotation.expires_at)}"
    lines.append(dates)
    return "\n".join(lines)


# ============================================================================
# Detail View
# ============================================================================

class DetailState(str, Enum):
    """Lifecycle of the detail view."""
    CLOSED = "closed"
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


class QuotationDetailView:
    """Sensitive data view for a single quotation"""
    
    def __init__(
        self,
        client,
        quotation_id: int,
        title: str = "",
        on_close: Optional[Callable[[], None]] = None
    ):
        self.client = client
        self.quotation_id = quotation_id
        self.title = title
        self.on_close = on_close
        self.state = DetailState.CLOSED
        self.data: Optional[SensitiveQuotation] = None
        self.error: Optional[str] = None
    
    @property
    def is_open(self) -> bool:
        return self.state != DetailState.CLOSED
    
    def open(self) -> DetailState:
        """Fetch the sensitive projection and move to loaded or error"""
        self.state = DetailState.LOADING
        self.data = None
        self.error = None
        try:
            data = self.client.get_sensitive_quotation_data(self.quotation_id)
        except (QuotationAPIError, ValidationError) as e:
            logger.error(f"Failed to load sensitive data for quotation {self.quotation_id}: {e}")
            self.error = "Failed to load quotation details"
            self.state = DetailState.ERROR
            return self.state
        
        if data is None:
            self.error = "Quotation not found"
            self.state = DetailState.ERROR
        else:
            self.data = data
            self.state = DetailState.LOADED
        return self.state
    
    def close(self) -> None:
        """Close the view and drop the fetched data"""
        if not self.is_open:
            return
        self.state = DetailState.CLOSED
        self.data = None
        self.error = None
        if self.on_close:
            self.on_close()
    
    # ------------------------------------------------------------------
    # Copy and inspection deterrents. Each handler returns True when the
    # hosting UI should suppress the default action.
    # ------------------------------------------------------------------
    
    def handle_context_menu(self) -> bool:
        return self.is_open
    
    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        if not self.is_open:
            return False
        if (ctrl or meta) and key.lower() in BLOCKED_SHORTCUT_KEYS:
            return True
        return key in BLOCKED_KEYS
    
    def handle_visibility_change(self, hidden: bool) -> None:
        """Close when the tab or window is hidden"""
        if hidden and self.is_open:
            logger.debug(f"Closing detail view for quotation {self.quotation_id}: window hidden")
            self.close()
    
    def render(self) -> str:
        """Plain-text rendering of the current state"""
        header = ["Sensitive Financial Data  [Confidential]"]
        if self.title:
            header.append(self.title)
        
        if self.state == DetailState.CLOSED:
            return ""
        if self.state == DetailState.LOADING:
            return "\n".join(header + ["Loading sensitive data..."])
        if self.state == DetailState.ERROR:
            return "\n".join(header + [f"Error: {self.error}"])
        
        data = self.data
        lines = header + [
            f"[{risk_badge(data.risk_level)}]  [{confidentiality_badge(data.confidentiality_level)}]",
            "",
            "Financial Overview",
            f"  Buy Price:   {format_currency(data.buy_price)}",
            f"  Sale Price:  {format_currency(data.sale_price)}",
            f"  Profit:      {format_currency(data.profit)}",
            f"  Margin:      {format_currency(data.margin)}",
            "",
            "Cost Analysis",
            f"  Cost Basis:        {format_currency(data.cost_basis)}",
            f"  Markup Percentage: {format_percentage(data.markup_percentage)}",
            f"  Final Sale Price:  {format_currency(data.sale_price)}",
        ]
        if data.internal_notes:
            lines += ["", "Internal Notes", f"  {data.internal_notes}"]
        lines += ["", CONFIDENTIALITY_NOTICE]
        return "\n".join(lines)


# ============================================================================
# List View
# ============================================================================

class QuotationListView:
    """Public quotation list with local search and status filtering"""
    
    def __init__(self, client):
        self.client = client
        self.quotations: List[PublicQuotation] = []
        self.search_term = ""
        self.status_filter = ALL_STATUSES
        self.is_loading = False
        self.error: Optional[str] = None
        self.detail: Optional[QuotationDetailView] = None
    
    def load(self) -> List[PublicQuotation]:
        """Fetch the public list; on failure the list is emptied and an error kept"""
        self.is_loading = True
        self.error = None
        try:
            self.quotations = self.client.list_public_quotations()
        except (QuotationAPIError, ValidationError) as e:
            logger.error(f"Failed to load quotations: {e}")
            self.quotations = []
            self.error = "Failed to load quotations"
        finally:
            self.is_loading = False
        return self.quotations
    
    refresh = load
    
    def set_search_term(self, term: str) -> None:
        self.search_term = term or ""
    
    def set_status_filter(self, status) -> None:
        """Filter on one status, or "all" to show every status"""
        if status in (None, ALL_STATUSES):
            self.status_filter = ALL_STATUSES
        else:
            self.status_filter = QuotationStatus(status).value
    
    def clear_filters(self) -> None:
        self.search_term = ""
        self.status_filter = ALL_STATUSES
    
    @property
    def has_filters(self) -> bool:
        return bool(self.search_term) or self.status_filter != ALL_STATUSES
    
    @property
    def filtered_quotations(self) -> List[PublicQuotation]:
        result = [q for q in self.quotations if matches_search(q, self.search_term)]
        if self.status_filter != ALL_STATUSES:
            result = [q for q in result if q.status.value == self.status_filter]
        return result
    
    @property
    def selected_id(self) -> Optional[int]:
        if self.detail is not None and self.detail.is_open:
            return self.detail.quotation_id
        return None
    
    def summary(self) -> Optional[str]:
        shown = len(self.filtered_quotations)
        if self.is_loading or shown == 0:
            return None
        return f"Showing {shown} of {len(self.quotations)} quotations"
    
    def empty_message(self) -> str:
        if self.error:
            return self.error
        if self.has_filters:
            return "No quotations found. Try adjusting your search criteria"
        return "No quotations found. No quotations are currently available"
    
    def select(self, quotation_id: int) -> QuotationDetailView:
        """Open the detail view for one quotation, closing any previous one"""
        self.close_detail()
        title = next((q.title for q in self.quotations if q.id == quotation_id), "")
        self.detail = QuotationDetailView(
            self.client, quotation_id, title=title, on_close=self._detail_closed
        )
        self.detail.open()
        return self.detail
    
    def close_detail(self) -> None:
        if self.detail is not None:
            self.detail.close()
        self.detail = None
    
    def _detail_closed(self) -> None:
        self.detail = None
    
    def render(self) -> str:
        """Plain-text rendering of the filtered list"""
        if self.is_loading:
            return "Loading quotations..."
        quotations = self.filtered_quotations
        if not quotations:
            return self.empty_message()
        cards = [render_card(q) for q in quotations]
        return "\n\n".join(cards + [self.summary()])
