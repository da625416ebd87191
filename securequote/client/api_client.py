"""
HTTP client for the SecureQuote RPC API.

Wraps a requests session (or any object with the same get/post interface)
and returns the same Pydantic models the server uses.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from securequote.errors import QuotationAPIError
from securequote.models import (
    CreateQuotationRequest,
    HealthCheckResponse,
    PublicQuotation,
    Quotation,
    SensitiveQuotation,
    UpdateQuotationRequest,
)
from securequote.utils.config import settings

logger = logging.getLogger(__name__)


class QuotationClient:
    """Client for the quotation RPC endpoints"""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
        prefix: Optional[str] = None
    ):
        """
        Initialize the client.
        
        Args:
            base_url: Server URL (defaults to settings.CLIENT_BASE_URL)
            session: HTTP session with requests-style get/post (defaults to requests.Session())
            timeout: Request timeout in seconds (defaults to settings.CLIENT_TIMEOUT)
            prefix: Route prefix (defaults to settings.API_PREFIX)
        """
        self.base_url = (base_url or settings.CLIENT_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout or settings.CLIENT_TIMEOUT
        self.prefix = settings.API_PREFIX if prefix is None else prefix
    
    def _url(self, operation: str) -> str:
        return f"{self.base_url}{self.prefix}/{operation}"
    
    def _query(self, operation: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self.session.get(self._url(operation), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{operation} request failed: {e}")
            raise QuotationAPIError(None, str(e)) from e
        return self._handle(operation, response)
    
    def _mutate(self, operation: str, payload: Dict[str, Any]) -> Any:
        try:
            response = self.session.post(self._url(operation), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{operation} request failed: {e}")
            raise QuotationAPIError(None, str(e)) from e
        return self._handle(operation, response)
    
    def _handle(self, operation: str, response) -> Any:
        if response.status_code >= 400:
            try:
                body = response.json()
                detail = body.get("detail", body) if isinstance(body, dict) else body
            except ValueError:
                detail = response.text
            logger.warning(f"{operation} returned HTTP {response.status_code}")
            raise QuotationAPIError(response.status_code, detail)
        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            logger.error(f"{operation} returned a body that is not JSON: {e}")
            raise QuotationAPIError(response.status_code, response.text) from e
    
    # ==============================
    # Queries
    # ==============================
    
    def healthcheck(self) -> HealthCheckResponse:
        return HealthCheckResponse.model_validate(self._query("healthcheck"))
    
    def list_public_quotations(self) -> List[PublicQuotation]:
        data = self._query("listPublicQuotations")
        return [PublicQuotation.model_validate(item) for item in data]
    
    def get_quotation_by_id(self, quotation_id: int) -> Optional[Quotation]:
        data = self._query("getQuotationById", {"id": quotation_id})
        return None if data is None else Quotation.model_validate(data)
    
    def get_sensitive_quotation_data(self, quotation_id: int) -> Optional[SensitiveQuotation]:
        data = self._query("getSensitiveQuotationData", {"id": quotation_id})
        return None if data is None else SensitiveQuotation.model_validate(data)
    
    # ==============================
    # Mutations
    # ==============================
    
    def create_quotation(
        self,
        payload: Union[CreateQuotationRequest, Mapping[str, Any]]
    ) -> Quotation:
        """Create a quotation; the payload is validated locally first"""
        request = CreateQuotationRequest.model_validate(payload)
        data = self._mutate("createQuotation", request.model_dump(mode="json", exclude_unset=True))
        return Quotation.model_validate(data)
    
    def update_quotation(self, quotation_id: int, **changes: Any) -> Optional[Quotation]:
        """Send only the given fields; pass None to clear a nullable field"""
        request = UpdateQuotationRequest(id=quotation_id, **changes)
        data = self._mutate("updateQuotation", request.model_dump(mode="json", exclude_unset=True))
        return None if data is None else Quotation.model_validate(data)
    
    def delete_quotation(self, quotation_id: int) -> bool:
        return bool(self._mutate("deleteQuotation", {"id": quotation_id}))
