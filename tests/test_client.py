"""
Tests for the HTTP client, the list and detail views and display formatting.

The client talks to the FastAPI app through its TestClient, which offers
the same get/post interface as a requests session.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from securequote.client import DetailState, QuotationClient, QuotationDetailView, QuotationListView
from securequote.client.formatting import (
    confidentiality_badge,
    format_currency,
    format_date,
    format_percentage,
    risk_badge,
    status_badge,
)
from securequote.errors import QuotationAPIError
from securequote.models import QuotationStatus


@pytest.fixture
def seeded(service, acme_payload, techstart_payload):
    """Three quotations in the store"""
    acme = service.create_quotation(acme_payload)
    techstart = service.create_quotation(techstart_payload)
    hipaa = service.create_quotation({
        **acme_payload,
        "client_name": "Healthcare Partners",
        "reference_number": "QT-2024-005",
        "title": "HIPAA Compliance Platform",
        "description": "Patient data management system",
        "status": "expired",
        "risk_level": "high",
    })
    return acme, techstart, hipaa


def _failing_client(exc):
    client = MagicMock(spec=QuotationClient)
    client.list_public_quotations.side_effect = exc
    client.get_sensitive_quotation_data.side_effect = exc
    return client


class TestQuotationClient:
    
    def test_healthcheck(self, api_client):
        assert api_client.healthcheck().status == "ok"
    
    def test_create_and_fetch(self, api_client, techstart_payload):
        created = api_client.create_quotation(techstart_payload)
        
        assert created.buy_price == Decimal("89500.1234")
        assert api_client.get_quotation_by_id(created.id) == created
        assert api_client.get_sensitive_quotation_data(created.id).profit == Decimal("42000.00")
    
    def test_update_and_delete(self, api_client, acme_payload):
        created = api_client.create_quotation(acme_payload)
        
        updated = api_client.update_quotation(created.id, status="approved", internal_notes="Signed")
        
        assert updated.status == QuotationStatus.APPROVED
        assert updated.internal_notes == "Signed"
        assert updated.sale_price == created.sale_price
        assert api_client.delete_quotation(created.id) is True
        assert api_client.delete_quotation(created.id) is False
        assert api_client.update_quotation(created.id, title="Gone") is None
    
    def test_not_found_returns_none(self, api_client):
        assert api_client.get_quotation_by_id(123) is None
        assert api_client.get_sensitive_quotation_data(123) is None
    
    def test_error_status_raises_api_error(self, acme_payload):
        session = MagicMock()
        session.post.return_value.status_code = 500
        session.post.return_value.json.return_value = {"detail": "Internal server error"}
        client = QuotationClient(base_url="http://quotes.local", session=session)
        
        with pytest.raises(QuotationAPIError) as exc_info:
            client.create_quotation(acme_payload)
        
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Internal server error"
        assert session.post.call_args[0][0] == "http://quotes.local/api/createQuotation"
    
    def test_transport_error_raises_api_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        client = QuotationClient(base_url="http://quotes.local", session=session)
        
        with pytest.raises(QuotationAPIError) as exc_info:
            client.list_public_quotations()
        assert exc_info.value.status_code is None
    
    def test_non_json_success_body_raises_api_error(self):
        session = MagicMock()
        session.get.return_value.status_code = 200
        session.get.return_value.text = "<html>Gateway login</html>"
        session.get.return_value.json.side_effect = ValueError("Expecting value")
        client = QuotationClient(base_url="http://quotes.local", session=session)
        
        with pytest.raises(QuotationAPIError) as exc_info:
            client.get_sensitive_quotation_data(1)
        
        assert exc_info.value.status_code == 200
        assert exc_info.value.detail == "<html>Gateway login</html>"
        
        detail = QuotationDetailView(client, 1)
        assert detail.open() == DetailState.ERROR
        assert detail.error == "Failed to load quotation details"
    
    def test_money_is_decoded_to_exact_decimals(self):
        session = MagicMock()
        session.get.return_value.status_code = 200
        session.get.return_value.json.side_effect = lambda **kwargs: json.loads(
            '{"id": 1, "buy_price": 0.1, "sale_price": 0.3, "margin": 0.2, "profit": 0.2, '
            '"cost_basis": 0.1, "markup_percentage": 200.0, "internal_notes": null, '
            '"risk_level": "low", "confidentiality_level": "restricted"}',
            **kwargs
        )
        client = QuotationClient(base_url="http://quotes.local", session=session)
        
        data = client.get_sensitive_quotation_data(1)
        
        assert data.buy_price == Decimal("0.1")
        assert data.sale_price - data.buy_price == data.margin


class TestQuotationListView:
    
    def test_load_fetches_public_list(self, api_client, seeded):
        view = QuotationListView(api_client)
        
        assert len(view.load()) == 3
        assert view.error is None
        assert view.is_loading is False
        assert view.summary() == "Showing 3 of 3 quotations"
    
    def test_search_is_case_insensitive_across_fields(self, api_client, seeded):
        view = QuotationListView(api_client)
        view.load()
        
        view.set_search_term("acme")
        assert [q.client_name for q in view.filtered_quotations] == ["Acme"]
        
        view.set_search_term("qt-2024")
        assert len(view.filtered_quotations) == 2
        
        view.set_search_term("PATIENT DATA")
        assert [q.title for q in view.filtered_quotations] == ["HIPAA Compliance Platform"]
    
    def test_status_filter_composes_with_search(self, api_client, seeded):
        view = QuotationListView(api_client)
        view.load()
        
        view.set_status_filter("expired")
        assert [q.reference_number for q in view.filtered_quotations] == ["QT-2024-005"]
        
        view.set_search_term("cloud")
        assert view.filtered_quotations == []
        assert view.empty_message().endswith("Try adjusting your search criteria")
        
        view.clear_filters()
        assert len(view.filtered_quotations) == 3
    
    def test_unknown_status_filter_rejected(self, api_client):
        view = QuotationListView(api_client)
        with pytest.raises(ValueError):
            view.set_status_filter("archived")
    
    def test_load_failure_shows_empty_error_state(self):
        view = QuotationListView(_failing_client(QuotationAPIError(500, "Internal server error")))
        
        assert view.load() == []
        assert view.error == "Failed to load quotations"
        assert view.render() == "Failed to load quotations"
        assert view.summary() is None
    
    def test_load_shows_loading_state_while_pending(self, api_client, seeded):
        view = QuotationListView(api_client)
        seen = []
        fetch = api_client.list_public_quotations
        
        def spy():
            seen.append((view.is_loading, view.render(), view.summary()))
            return fetch()
        
        with patch.object(api_client, 'list_public_quotations', side_effect=spy):
            view.load()
        
        assert seen == [(True, "Loading quotations...", None)]
        assert view.is_loading is False
        assert view.render().endswith("Showing 3 of 3 quotations")
    
    def test_empty_list_message(self, api_client):
        view = QuotationListView(api_client)
        view.load()
        assert view.render() == "No quotations found. No quotations are currently available"
    
    def test_select_opens_detail_view(self, api_client, seeded):
        acme, techstart, _ = seeded
        view = QuotationListView(api_client)
        view.load()
        
        detail = view.select(techstart.id)
        
        assert detail.state == DetailState.LOADED
        assert detail.title == "Cloud Infrastructure Setup"
        assert view.selected_id == techstart.id
        
        second = view.select(acme.id)
        assert detail.state == DetailState.CLOSED
        assert view.selected_id == acme.id
        
        second.handle_visibility_change(hidden=True)
        assert view.selected_id is None
        assert view.detail is None
    
    def test_render_lists_cards(self, api_client, seeded):
        view = QuotationListView(api_client)
        view.load()
        
        text = view.render()
        
        assert "Cloud Infrastructure Setup  [APPROVED]" in text
        assert "Ref: QT-1" in text
        assert "Created: Jan 15, 2024" in text
        assert "Expires: Feb 10, 2024" in text
        assert text.endswith("Showing 3 of 3 quotations")
        assert "89,500" not in text


class TestQuotationDetailView:
    
    def test_open_loads_sensitive_data(self, api_client, seeded):
        _, techstart, _ = seeded
        detail = QuotationDetailView(api_client, techstart.id, title=techstart.title)
        
        assert detail.open() == DetailState.LOADED
        assert detail.data.buy_price == Decimal("89500.1234")
        
        text = detail.render()
        assert "Buy Price:   $89,500.12" in text
        assert "Markup Percentage: 58.07%" in text
        assert "[Risk: LOW]  [CONFIDENTIAL]" in text
        assert "Budget approval secured through Q2." in text
        assert "strictly confidential" in text
    
    def test_open_shows_loading_state_while_pending(self, api_client, seeded):
        _, techstart, _ = seeded
        detail = QuotationDetailView(api_client, techstart.id, title=techstart.title)
        seen = []
        fetch = api_client.get_sensitive_quotation_data
        
        def spy(quotation_id):
            seen.append((detail.state, detail.render()))
            return fetch(quotation_id)
        
        with patch.object(api_client, 'get_sensitive_quotation_data', side_effect=spy):
            detail.open()
        
        assert seen == [(
            DetailState.LOADING,
            "Sensitive Financial Data  [Confidential]\nCloud Infrastructure Setup\nLoading sensitive data...",
        )]
        assert detail.state == DetailState.LOADED
    
    def test_not_found_is_error_state(self, api_client):
        detail = QuotationDetailView(api_client, 404)
        
        assert detail.open() == DetailState.ERROR
        assert detail.error == "Quotation not found"
        assert "Error: Quotation not found" in detail.render()
    
    def test_fetch_failure_is_error_state(self):
        detail = QuotationDetailView(_failing_client(QuotationAPIError(None, "refused")), 1)
        
        assert detail.open() == DetailState.ERROR
        assert detail.error == "Failed to load quotation details"
        assert detail.data is None
    
    def test_deterrents_only_while_open(self, api_client, seeded):
        acme, _, _ = seeded
        detail = QuotationDetailView(api_client, acme.id)
        
        assert detail.handle_context_menu() is False
        assert detail.handle_key("c", ctrl=True) is False
        
        detail.open()
        assert detail.handle_context_menu() is True
        for key in "cspauij":
            assert detail.handle_key(key, ctrl=True) is True
        assert detail.handle_key("C", meta=True) is True
        assert detail.handle_key("F12") is True
        assert detail.handle_key("PrintScreen") is True
        assert detail.handle_key("c") is False
        assert detail.handle_key("v", ctrl=True) is False
    
    def test_hidden_tab_closes_and_clears_data(self, api_client, seeded):
        acme, _, _ = seeded
        closed = []
        detail = QuotationDetailView(api_client, acme.id, on_close=lambda: closed.append(True))
        detail.open()
        
        detail.handle_visibility_change(hidden=False)
        assert detail.is_open
        
        detail.handle_visibility_change(hidden=True)
        assert detail.state == DetailState.CLOSED
        assert detail.data is None
        assert closed == [True]
        assert detail.render() == ""


class TestFormatting:
    
    def test_format_currency(self):
        assert format_currency(Decimal("125000")) == "$125,000.00"
        assert format_currency(Decimal("0.005")) == "$0.01"
        assert format_currency(-50) == "-$50.00"
        assert format_currency(56.25) == "$56.25"
    
    def test_format_percentage(self):
        assert format_percentage(Decimal("56.25")) == "56.25%"
        assert format_percentage(50) == "50.00%"
    
    def test_format_date(self):
        assert format_date(datetime(2024, 2, 5, tzinfo=timezone.utc)) == "Feb 5, 2024"
    
    def test_badges(self):
        assert status_badge(QuotationStatus.PENDING) == "PENDING"
        assert risk_badge("high") == "Risk: HIGH"
        assert confidentiality_badge("top_secret") == "TOP SECRET"
