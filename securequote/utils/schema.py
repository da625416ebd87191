"""
Database schema for the quotations table.

Enumerated columns are backed by PostgreSQL enum types and monetary
columns by NUMERIC so amounts keep their exact decimal value.
"""

import logging

from securequote.utils.database import db

logger = logging.getLogger(__name__)


ENUM_TYPES = {
    "quotation_status": ("draft", "pending", "approved", "rejected", "expired"),
    "risk_level": ("low", "medium", "high"),
    "confidentiality_level": ("restricted", "confidential", "top_secret"),
}

QUOTATIONS_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS quotations (
        id                    SERIAL PRIMARY KEY,
        client_name           TEXT NOT NULL,
        reference_number      TEXT NOT NULL,
        status                quotation_status NOT NULL DEFAULT 'draft',
        title                 TEXT NOT NULL,
        description           TEXT,
        buy_price             NUMERIC(15, 4) NOT NULL,
        sale_price            NUMERIC(15, 4) NOT NULL,
        margin                NUMERIC(15, 4) NOT NULL,
        profit                NUMERIC(15, 4) NOT NULL,
        cost_basis            NUMERIC(15, 4) NOT NULL,
        markup_percentage     NUMERIC(5, 2) NOT NULL,
        internal_notes        TEXT,
        risk_level            risk_level NOT NULL DEFAULT 'medium',
        confidentiality_level confidentiality_level NOT NULL DEFAULT 'restricted',
        created_at            TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at            TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        expires_at            TIMESTAMPTZ
    )
"""


def _enum_type_ddl(name: str, values) -> str:
    """CREATE TYPE guarded against re-runs (PostgreSQL has no IF NOT EXISTS here)"""
    labels = ", ".join(f"'{value}'" for value in values)
    return f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN NULL;
        END $$;
    """


def schema_statements():
    """All DDL statements in execution order"""
    statements = [_enum_type_ddl(name, values) for name, values in ENUM_TYPES.items()]
    statements.append(QUOTATIONS_TABLE_DDL)
    return statements


def init_schema() -> None:
    """Create enum types and the quotations table if they do not exist"""
    for statement in schema_statements():
        db.execute_update(statement)
    logger.info("Quotation schema ready")
