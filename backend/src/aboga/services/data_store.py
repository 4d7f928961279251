"""
Persistence for chat sessions, messages, profiles, lawyers and consultations.

Two interchangeable stores implement the same interface: HostedDataStore
calls the hosted REST data API, SqlDataStore keeps the same tables in a
SQLAlchemy database.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from aboga import models
from aboga.core.constants import DEFAULT_SESSION_TITLE
from aboga.core.database import get_db_transaction
from aboga.core.exceptions import BackendError
from aboga.models.base import utc_now_iso
from aboga.schemas import (
    ChatMessage,
    ChatSession,
    Consultation,
    ConsultationCreate,
    Lawyer,
    MessageRole,
    Profile,
    StructuredResponse,
)
from aboga.services.response_processor import coerce_stored_response

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "chat_sessions"
MESSAGES_TABLE = "chat_messages"
PROFILES_TABLE = "profiles"
LAWYERS_TABLE = "lawyers"
CONSULTATIONS_TABLE = "consultations"


def message_from_row(row: Dict[str, Any]) -> ChatMessage:
    """Build a ChatMessage, discarding an invalid structured payload."""
    data = dict(row)
    data["structured_response"] = coerce_stored_response(data.get("structured_response"))
    return ChatMessage.model_validate(data)


def dump_structured(response: Optional[StructuredResponse]) -> Optional[Dict[str, Any]]:
    return response.model_dump(mode="json") if response is not None else None


class DataStore(ABC):
    """Storage operations used by the chat view and the lawyer directory."""

    @abstractmethod
    async def create_session(self, user_id: Optional[str], title: str = DEFAULT_SESSION_TITLE) -> ChatSession:
        ...

    @abstractmethod
    async def get_session(self, session_id: str) -> Optional[ChatSession]:
        ...

    @abstractmethod
    async def update_session(self, session_id: str, message_count: int, title: str) -> ChatSession:
        ...

    @abstractmethod
    async def add_message(
        self,
        session_id: str,
        role: MessageRole,
        content: str,
        structured_response: Optional[StructuredResponse] = None,
    ) -> ChatMessage:
        ...

    @abstractmethod
    async def list_messages(self, session_id: str) -> List[ChatMessage]:
        """Messages of a session, oldest first."""

    @abstractmethod
    async def list_available_lawyers(self) -> List[Lawyer]:
        """Available lawyers, highest rating first."""

    @abstractmethod
    async def get_lawyer(self, lawyer_id: str) -> Optional[Lawyer]:
        ...

    @abstractmethod
    async def create_consultation(self, consultation: ConsultationCreate) -> Consultation:
        ...

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        ...


class HostedDataStore(DataStore):
    """DataStore backed by the hosted REST data API."""

    def __init__(self, client):
        self.client = client

    async def create_session(self, user_id: Optional[str], title: str = DEFAULT_SESSION_TITLE) -> ChatSession:
        row = await self.client.insert(SESSIONS_TABLE, {"user_id": user_id, "title": title})
        return ChatSession.model_validate(row)

    async def get_session(self, session_id: str) -> Optional[ChatSession]:
        row = await self.client.select_one(SESSIONS_TABLE, {"id": session_id})
        return ChatSession.model_validate(row) if row else None

    async def update_session(self, session_id: str, message_count: int, title: str) -> ChatSession:
        rows = await self.client.update(
            SESSIONS_TABLE,
            {"message_count": message_count, "title": title, "updated_at": utc_now_iso()},
            {"id": session_id},
        )
        if not rows:
            raise BackendError(f"Chat session {session_id} was not updated")
        return ChatSession.model_validate(rows[0])

    async def add_message(
        self,
        session_id: str,
        role: MessageRole,
        content: str,
        structured_response: Optional[StructuredResponse] = None,
    ) -> ChatMessage:
        row = await self.client.insert(
            MESSAGES_TABLE,
            {
                "session_id": session_id,
                "role": MessageRole(role).value,
                "content": content,
                "structured_response": dump_structured(structured_response),
            },
        )
        return message_from_row(row)

    async def list_messages(self, session_id: str) -> List[ChatMessage]:
        rows = await self.client.select(MESSAGES_TABLE, eq={"session_id": session_id}, order="created_at")
        return [message_from_row(row) for row in rows]

    async def list_available_lawyers(self) -> List[Lawyer]:
        rows = await self.client.select(LAWYERS_TABLE, eq={"available": True}, order="rating", descending=True)
        return [Lawyer.model_validate(row) for row in rows]

    async def get_lawyer(self, lawyer_id: str) -> Optional[Lawyer]:
        row = await self.client.select_one(LAWYERS_TABLE, {"id": lawyer_id})
        return Lawyer.model_validate(row) if row else None

    async def create_consultation(self, consultation: ConsultationCreate) -> Consultation:
        row = await self.client.insert(CONSULTATIONS_TABLE, consultation.model_dump(mode="json"))
        return Consultation.model_validate(row)

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        row = await self.client.select_one(PROFILES_TABLE, {"id": user_id})
        return Profile.model_validate(row) if row else None


def _row_dict(instance) -> Dict[str, Any]:
    return {column.name: getattr(instance, column.name) for column in instance.__table__.columns}


class SqlDataStore(DataStore):
    """
    DataStore backed by SQLAlchemy.

    Database errors surface as BackendError so callers handle both stores
    the same way.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _transaction(self):
        return get_db_transaction(self.session_factory)

    async def create_session(self, user_id: Optional[str], title: str = DEFAULT_SESSION_TITLE) -> ChatSession:
        try:
            with self._transaction() as db:
                row = models.ChatSession(user_id=user_id, title=title, message_count=0)
                db.add(row)
                db.flush()
                return ChatSession.model_validate(_row_dict(row))
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to create chat session: {e}") from e

    async def get_session(self, session_id: str) -> Optional[ChatSession]:
        try:
            with self._transaction() as db:
                row = db.get(models.ChatSession, session_id)
                return ChatSession.model_validate(_row_dict(row)) if row else None
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to load chat session: {e}") from e

    async def update_session(self, session_id: str, message_count: int, title: str) -> ChatSession:
        try:
            with self._transaction() as db:
                row = db.get(models.ChatSession, session_id)
                if row is None:
                    raise BackendError(f"Chat session {session_id} was not updated")
                row.message_count = message_count
                row.title = title
                row.updated_at = utc_now_iso()
                db.flush()
                return ChatSession.model_validate(_row_dict(row))
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to update chat session: {e}") from e

    async def add_message(
        self,
        session_id: str,
        role: MessageRole,
        content: str,
        structured_response: Optional[StructuredResponse] = None,
    ) -> ChatMessage:
        try:
            with self._transaction() as db:
                row = models.ChatMessage(
                    session_id=session_id,
                    role=MessageRole(role).value,
                    content=content,
                    structured_response=dump_structured(structured_response),
                )
                db.add(row)
                db.flush()
                return message_from_row(_row_dict(row))
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to save chat message: {e}") from e

    async def list_messages(self, session_id: str) -> List[ChatMessage]:
        try:
            with self._transaction() as db:
                rows = (
                    db.query(models.ChatMessage)
                    .filter(models.ChatMessage.session_id == session_id)
                    .order_by(models.ChatMessage.created_at.asc())
                    .all()
                )
                return [message_from_row(_row_dict(row)) for row in rows]
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to load chat messages: {e}") from e

    async def list_available_lawyers(self) -> List[Lawyer]:
        try:
            with self._transaction() as db:
                rows = (
                    db.query(models.Lawyer)
                    .filter(models.Lawyer.available.is_(True))
                    .order_by(models.Lawyer.rating.desc())
                    .all()
                )
                return [Lawyer.model_validate(_row_dict(row)) for row in rows]
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to load lawyers: {e}") from e

    async def get_lawyer(self, lawyer_id: str) -> Optional[Lawyer]:
        try:
            with self._transaction() as db:
                row = db.get(models.Lawyer, lawyer_id)
                return Lawyer.model_validate(_row_dict(row)) if row else None
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to load lawyer: {e}") from e

    async def create_consultation(self, consultation: ConsultationCreate) -> Consultation:
        try:
            with self._transaction() as db:
                row = models.Consultation(**consultation.model_dump(mode="json"))
                db.add(row)
                db.flush()
                return Consultation.model_validate(_row_dict(row))
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to create consultation: {e}") from e

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            with self._transaction() as db:
                row = db.get(models.Profile, user_id)
                return Profile.model_validate(_row_dict(row)) if row else None
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to load profile: {e}") from e
