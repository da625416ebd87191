"""
Shared pytest fixtures for the SecureQuote test suite.

Service, gateway and client tests run against an in-memory store that
behaves like the PostgreSQL quotations table, so no database is needed.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from securequote.main import create_app
from securequote.models import (
    PUBLIC_FIELDS,
    QUOTATION_FIELDS,
    SENSITIVE_FIELDS,
    WRITABLE_FIELDS,
)
from securequote.services.quotation_service import QuotationService, get_quotation_service
from securequote.services.quotation_store import _to_db_value


class InMemoryQuotationStore:
    """Dictionary-backed stand-in for QuotationStore"""
    
    def __init__(self):
        self.rows = {}
        self._next_id = 1
    
    def insert(self, values):
        row = {name: _to_db_value(values.get(name)) for name in QUOTATION_FIELDS if name != "id"}
        row["id"] = self._next_id
        self._next_id += 1
        self.rows[row["id"]] = row
        return dict(row)
    
    def get(self, quotation_id):
        row = self.rows.get(quotation_id)
        return dict(row) if row else None
    
    def get_sensitive(self, quotation_id):
        row = self.rows.get(quotation_id)
        return {name: row[name] for name in SENSITIVE_FIELDS} if row else None
    
    def list_public(self):
        return [
            {name: self.rows[key][name] for name in PUBLIC_FIELDS}
            for key in sorted(self.rows)
        ]
    
    def update(self, quotation_id, changes, updated_at):
        unknown = set(changes) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")
        row = self.rows.get(quotation_id)
        if row is None:
            return None
        for name, value in changes.items():
            row[name] = _to_db_value(value)
        row["updated_at"] = updated_at
        return dict(row)
    
    def delete(self, quotation_id):
        return self.rows.pop(quotation_id, None) is not None


class StepClock:
    """Clock that advances one minute per reading"""
    
    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    
    def __call__(self):
        value = self.current
        self.current = value + timedelta(minutes=1)
        return value


@pytest.fixture
def acme_payload():
    """Create payload used throughout the suite"""
    return {
        "client_name": "Acme",
        "reference_number": "QT-1",
        "title": "License",
        "buy_price": 100,
        "sale_price": 150,
        "margin": 50,
        "profit": 45,
        "cost_basis": 95,
        "markup_percentage": 50,
    }


@pytest.fixture
def techstart_payload():
    return {
        "client_name": "TechStart Inc.",
        "reference_number": "QT-2024-002",
        "status": "approved",
        "title": "Cloud Infrastructure Setup",
        "description": "Complete cloud migration and infrastructure setup",
        "buy_price": "89500.1234",
        "sale_price": "134250.00",
        "margin": "44750.00",
        "profit": "42000.00",
        "cost_basis": "85000.00",
        "markup_percentage": "58.07",
        "internal_notes": "Budget approval secured through Q2.",
        "risk_level": "low",
        "confidentiality_level": "confidential",
        "expires_at": "2024-02-10T00:00:00Z",
    }


@pytest.fixture
def store():
    return InMemoryQuotationStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def service(store, clock):
    return QuotationService(store=store, clock=clock)


@pytest.fixture
def app(service):
    application = create_app(init_db=False)
    application.dependency_overrides[get_quotation_service] = lambda: service
    return application


@pytest.fixture
def http(app):
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def api_client(http):
    from securequote.client import QuotationClient
    return QuotationClient(base_url="http://testserver", session=http)


