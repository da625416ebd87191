"""
Quotation Store

Persists quotation rows in the PostgreSQL quotations table. Rows go in and
come out as plain dictionaries keyed by column name; the service layer turns
them into models.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, List, Optional

import psycopg2

from securequote.errors import QuotationStoreError
from securequote.models.quotation import (
    PUBLIC_FIELDS,
    QUOTATION_FIELDS,
    SENSITIVE_FIELDS,
    WRITABLE_FIELDS,
)
from securequote.utils.database import db

logger = logging.getLogger(__name__)

ALL_COLUMNS = ", ".join(QUOTATION_FIELDS)
PUBLIC_COLUMNS = ", ".join(PUBLIC_FIELDS)
SENSITIVE_COLUMNS = ", ".join(SENSITIVE_FIELDS)


def _to_db_value(value: Any) -> Any:
    """Enums are stored by their string value"""
    if isinstance(value, Enum):
        return value.value
    return value


class QuotationStore:
    """SQL access to the quotations table"""
    
    table = "quotations"
    
    @contextmanager
    def _store_errors(self, operation: str):
        """Translate driver errors into QuotationStoreError"""
        try:
            yield
        except psycopg2.Error as e:
            logger.exception(f"Quotation store {operation} failed: {e}")
            raise QuotationStoreError(f"Quotation store {operation} failed") from e
    
    def insert(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one quotation row and return it as stored"""
        columns = [name for name in values if name in QUOTATION_FIELDS and name != "id"]
        column_list = ", ".join(columns)
        placeholders = ", ".join(["%s"] * len(columns))
        query = f"""
            INSERT INTO {self.table} ({column_list})
            VALUES ({placeholders})
            RETURNING {ALL_COLUMNS}
        """
        params = tuple(_to_db_value(values[name]) for name in columns)
        with self._store_errors("insert"):
            return db.execute_query(query, params, fetch_one=True)
    
    def get(self, quotation_id: int) -> Optional[Dict[str, Any]]:
        """Get a complete quotation row"""
        query = f"""
            SELECT {ALL_COLUMNS}
            FROM {self.table}
            WHERE id = %s
        """
        with self._store_errors("get"):
            return db.execute_query(query, (quotation_id,), fetch_one=True)
    
    def get_sensitive(self, quotation_id: int) -> Optional[Dict[str, Any]]:
        """Get only the sensitive columns of a quotation row"""
        query = f"""
            SELECT {SENSITIVE_COLUMNS}
            FROM {self.table}
            WHERE id = %s
        """
        with self._store_errors("get_sensitive"):
            return db.execute_query(query, (quotation_id,), fetch_one=True)
    
    def list_public(self) -> List[Dict[str, Any]]:
        """Get the public columns of every quotation row, ordered by id"""
        query = f"""
            SELECT {PUBLIC_COLUMNS}
            FROM {self.table}
            ORDER BY id ASC
        """
        with self._store_errors("list_public"):
            return db.execute_query(query)
    
    def update(
        self,
        quotation_id: int,
        changes: Dict[str, Any],
        updated_at: Any
    ) -> Optional[Dict[str, Any]]:
        """
        Update the supplied columns of one row
        
        Args:
            quotation_id: Row to update
            changes: Column values to write; other columns are untouched
            updated_at: New value of updated_at
        
        Returns:
            The updated row, or None if no row has that id
        """
        unknown = set(changes) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")
        
        columns = list(changes)
        assignments = [f"{name} = %s" for name in columns] + ["updated_at = %s"]
        set_clause = ", ".join(assignments)
        query = f"""
            UPDATE {self.table}
            SET {set_clause}
            WHERE id = %s
            RETURNING {ALL_COLUMNS}
        """
        params = tuple(_to_db_value(changes[name]) for name in columns) + (updated_at, quotation_id)
        with self._store_errors("update"):
            return db.execute_query(query, params, fetch_one=True)
    
    def delete(self, quotation_id: int) -> bool:
        """Delete one row; True if a row was removed"""
        query = f"""
            DELETE FROM {self.table}
            WHERE id = %s
            RETURNING id
        """
        with self._store_errors("delete"):
            row = db.execute_query(query, (quotation_id,), fetch_one=True)
        return row is not None


# Singleton instance
_quotation_store = None

def get_quotation_store() -> QuotationStore:
    """Get singleton instance of QuotationStore"""
    global _quotation_store
    if _quotation_store is None:
        _quotation_store = QuotationStore()
    return _quotation_store
