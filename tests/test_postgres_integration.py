"""
Round-trip tests against a live PostgreSQL database.

Skipped unless SECUREQUOTE_TEST_DB=1; connection settings come from the
usual DB_* environment variables.
"""

import os
from decimal import Decimal

import pytest

from securequote.services.quotation_service import QuotationService
from securequote.services.quotation_store import QuotationStore
from securequote.utils.database import db
from securequote.utils.schema import init_schema

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(
        os.environ.get("SECUREQUOTE_TEST_DB") != "1",
        reason="set SECUREQUOTE_TEST_DB=1 to run against PostgreSQL",
    ),
]


@pytest.fixture
def pg_service():
    init_schema()
    created = []
    service = QuotationService(store=QuotationStore())
    yield service, created
    for quotation_id in created:
        service.delete_quotation(quotation_id)
    db.close()


def test_database_answers():
    assert db.ping() is True


def test_schema_is_idempotent():
    init_schema()
    init_schema()


def test_crud_round_trip_keeps_exact_decimals(pg_service, techstart_payload):
    service, created = pg_service
    
    quotation = service.create_quotation(techstart_payload)
    created.append(quotation.id)
    
    assert quotation.buy_price == Decimal("89500.1234")
    assert quotation.markup_percentage == Decimal("58.07")
    assert service.get_sensitive_quotation_data(quotation.id).buy_price == Decimal("89500.1234")
    
    updated = service.update_quotation({"id": quotation.id, "status": "pending"})
    assert updated.status.value == "pending"
    assert updated.sale_price == quotation.sale_price
    assert updated.updated_at > quotation.updated_at
    
    public_ids = [q.id for q in service.list_public_quotations()]
    assert quotation.id in public_ids
    
    assert service.delete_quotation(quotation.id) is True
    assert service.delete_quotation(quotation.id) is False
    assert service.get_quotation_by_id(quotation.id) is None
