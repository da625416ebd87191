"""
Quotation Service

Implements the quotation operations on top of the store: create, read
(complete, sensitive-only and public list), partial update and delete.
Translates stored rows into the full, public and sensitive projections.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from securequote.errors import QuotationValidationError
from securequote.models.api import CreateQuotationRequest, UpdateQuotationRequest
from securequote.models.quotation import (
    PublicQuotation,
    Quotation,
    SensitiveQuotation,
)
from securequote.services.quotation_store import QuotationStore, get_quotation_store

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_request(model: Type[RequestT], payload: Union[RequestT, Mapping[str, Any]]) -> RequestT:
    """Accept a request model or a plain mapping; report the first bad field"""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        raise QuotationValidationError(field, error["msg"]) from e


class QuotationService:
    """Quotation operations over a QuotationStore"""
    
    def __init__(
        self,
        store: Optional[QuotationStore] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the quotation service.
        
        Args:
            store: Row store (defaults to the PostgreSQL store singleton)
            clock: Source of the current time for timestamps
        """
        self.store = store if store is not None else get_quotation_store()
        self.clock = clock or _utcnow
    
    def create_quotation(
        self,
        payload: Union[CreateQuotationRequest, Mapping[str, Any]]
    ) -> Quotation:
        """
        Create a quotation.
        
        Both timestamps are set to the creation instant and the store
        assigns the id.
        
        Raises:
            QuotationValidationError: If a mapping payload fails validation
            QuotationStoreError: If the database insert fails
        """
        request = _coerce_request(CreateQuotationRequest, payload)
        now = self.clock()
        values = request.model_dump()
        values["created_at"] = now
        values["updated_at"] = now
        
        row = self.store.insert(values)
        quotation = Quotation.model_validate(row)
        logger.info(f"Created quotation id={quotation.id} ref={quotation.reference_number}")
        return quotation
    
    def get_quotation_by_id(self, quotation_id: int) -> Optional[Quotation]:
        """Get a complete quotation, or None if it does not exist"""
        row = self.store.get(quotation_id)
        if row is None:
            logger.debug(f"Quotation id={quotation_id} not found")
            return None
        return Quotation.model_validate(row)
    
    def get_sensitive_quotation_data(self, quotation_id: int) -> Optional[SensitiveQuotation]:
        """Get only the financial and classification fields of a quotation"""
        row = self.store.get_sensitive(quotation_id)
        if row is None:
            logger.debug(f"Sensitive data for quotation id={quotation_id} not found")
            return None
        return SensitiveQuotation.model_validate(row)
    
    def list_public_quotations(self) -> List[PublicQuotation]:
        """Get the public projection of every quotation"""
        rows = self.store.list_public()
        logger.debug(f"Listing {len(rows)} public quotations")
        return [PublicQuotation.model_validate(row) for row in rows]
    
    def update_quotation(
        self,
        payload: Union[UpdateQuotationRequest, Mapping[str, Any]]
    ) -> Optional[Quotation]:
        """
        Apply a partial update.
        
        Fields present in the payload replace the stored value, absent
        fields are left alone and updated_at is always refreshed.
        
        Returns:
            The updated quotation, or None if the id does not exist
        """
        request = _coerce_request(UpdateQuotationRequest, payload)
        changes = request.changes()
        
        row = self.store.update(request.id, changes, updated_at=self.clock())
        if row is None:
            logger.info(f"Update skipped, quotation id={request.id} not found")
            return None
        logger.info(f"Updated quotation id={request.id} fields={sorted(changes)}")
        return Quotation.model_validate(row)
    
    def delete_quotation(self, quotation_id: int) -> bool:
        """Delete a quotation; False if there was nothing to delete"""
        deleted = self.store.delete(quotation_id)
        if deleted:
            logger.info(f"Deleted quotation id={quotation_id}")
        else:
            logger.info(f"Delete skipped, quotation id={quotation_id} not found")
        return deleted


# Singleton instance
_quotation_service = None

def get_quotation_service() -> QuotationService:
    """Get singleton instance of QuotationService"""
    global _quotation_service
    if _quotation_service is None:
        _quotation_service = QuotationService()
    return _quotation_service


def reset_quotation_service() -> None:
    """Drop the singleton so the next call builds a fresh service"""
    global _quotation_service
    _quotation_service = None
