"""
Quotation RPC routes.

Each quotation operation is exposed under its own name: queries are GET
requests with query parameters, mutations are POST requests with a JSON
body. Missing quotations come back as JSON null (or false for deletes).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from securequote.models import (
    CreateQuotationRequest,
    PublicQuotation,
    Quotation,
    QuotationIdRequest,
    SensitiveQuotation,
    UpdateQuotationRequest,
)
from securequote.services.quotation_service import QuotationService, get_quotation_service

router = APIRouter(tags=["quotations"])


# ==============================
# QUERIES
# ==============================

@router.get("/listPublicQuotations", response_model=List[PublicQuotation])
def list_public_quotations(service: QuotationService = Depends(get_quotation_service)):
    return service.list_public_quotations()


@router.get("/getQuotationById", response_model=Optional[Quotation])
def get_quotation_by_id(
    quotation_id: int = Query(..., alias="id"),
    service: QuotationService = Depends(get_quotation_service),
):
    return service.get_quotation_by_id(quotation_id)


@router.get("/getSensitiveQuotationData", response_model=Optional[SensitiveQuotation])
def get_sensitive_quotation_data(
    quotation_id: int = Query(..., alias="id"),
    service: QuotationService = Depends(get_quotation_service),
):
    return service.get_sensitive_quotation_data(quotation_id)


# ==============================
# MUTATIONS
# ==============================

@router.post("/createQuotation", response_model=Quotation)
def create_quotation(
    payload: CreateQuotationRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    return service.create_quotation(payload)


@router.post("/updateQuotation", response_model=Optional[Quotation])
def update_quotation(
    payload: UpdateQuotationRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    return service.update_quotation(payload)


@router.post("/deleteQuotation", response_model=bool)
def delete_quotation(
    payload: QuotationIdRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    return service.delete_quotation(payload.id)
