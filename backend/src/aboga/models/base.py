"""
Declarative base for ABOGA's SQL tables.
"""

from datetime import datetime, timezone
import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Primary key generator shared by every table."""
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Timestamps are stored as ISO-8601 strings."""
    return datetime.now(timezone.utc).isoformat()
