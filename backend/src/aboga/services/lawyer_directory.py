"""
Lawyer directory for ABOGA.

Lists available lawyers, keeps the list/detail selection, and files
consultation requests on behalf of signed-in users.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from aboga import models
from aboga.core.constants import (
    CONSULTATION_FAILED_NOTICE,
    CONSULTATION_REQUEST_NOTES,
    CONSULTATION_SENT_NOTICE,
    SIGN_IN_REQUIRED_NOTICE,
)
from aboga.core.database import get_db_transaction
from aboga.core.exceptions import NotFoundError
from aboga.core.security import AuthContext
from aboga.models.base import new_id
from aboga.schemas import Consultation, ConsultationCreate, ConsultationStatus, Lawyer
from aboga.services.data_store import DataStore

logger = logging.getLogger(__name__)


@dataclass
class ConsultationOutcome:
    success: bool
    message: str
    consultation: Optional[Consultation] = None
    blocked: bool = False


class LawyerDirectory:
    """List and detail state of the lawyer directory."""

    def __init__(self, store: DataStore, auth: AuthContext):
        self.store = store
        self.auth = auth
        self.lawyers: List[Lawyer] = []
        self.selected: Optional[Lawyer] = None
        self.loading = False

    async def open(self) -> List[Lawyer]:
        """Fetch available lawyers, best rated first."""
        self.loading = True
        try:
            self.lawyers = await self.store.list_available_lawyers()
        finally:
            self.loading = False
        logger.info(f"Loaded {len(self.lawyers)} available lawyers")
        return self.lawyers

    def select(self, lawyer_id: str) -> Lawyer:
        """Show the detail of a listed lawyer; no re-fetch."""
        for lawyer in self.lawyers:
            if lawyer.id == lawyer_id:
                self.selected = lawyer
                return lawyer
        raise NotFoundError(f"Lawyer {lawyer_id} is not in the directory")

    def back(self) -> None:
        self.selected = None

    async def request_consultation(
        self,
        lawyer: Optional[Lawyer] = None,
        chat_session_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ConsultationOutcome:
        """Ask the selected (or given) lawyer for a consultation."""
        lawyer = lawyer or self.selected
        if lawyer is None:
            raise NotFoundError("No lawyer selected")

        if not self.auth.is_authenticated:
            return ConsultationOutcome(success=False, message=SIGN_IN_REQUIRED_NOTICE, blocked=True)

        request = ConsultationCreate(
            user_id=self.auth.user_id,
            lawyer_id=lawyer.id,
            chat_session_id=chat_session_id,
            status=ConsultationStatus.PENDING,
            agreed_rate=lawyer.midpoint_rate,
            notes=notes or CONSULTATION_REQUEST_NOTES,
        )

        try:
            consultation = await self.store.create_consultation(request)
        except Exception as e:
            logger.error(f"Error requesting consultation with lawyer {lawyer.id}: {e}")
            return ConsultationOutcome(success=False, message=CONSULTATION_FAILED_NOTICE)

        logger.info(f"Consultation {consultation.id} requested with lawyer {lawyer.id}")
        self.selected = None
        return ConsultationOutcome(success=True, message=CONSULTATION_SENT_NOTICE, consultation=consultation)


def seed_lawyers(session_factory, lawyers: List[dict], refresh: bool = False) -> int:
    """
    Insert lawyer rows into the SQL backend.

    Rows are validated as Lawyer records first; existing rows with the same
    license number are skipped unless `refresh` clears the table.
    """
    inserted = 0
    with get_db_transaction(session_factory) as db:
        if refresh:
            deleted = db.query(models.Lawyer).delete()
            logger.info(f"Removed {deleted} existing lawyers")

        existing = {number for (number,) in db.query(models.Lawyer.license_number).all()}
        for data in lawyers:
            lawyer = Lawyer.model_validate({"id": new_id(), **data})
            if lawyer.license_number in existing:
                logger.info(f"Skipping lawyer {lawyer.license_number}: already present")
                continue
            db.add(models.Lawyer(**lawyer.model_dump(exclude={"created_at"})))
            existing.add(lawyer.license_number)
            inserted += 1

    logger.info(f"Seeded {inserted} lawyers")
    return inserted
