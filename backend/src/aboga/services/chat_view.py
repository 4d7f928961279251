"""
Chat view orchestration for ABOGA.

A ChatView owns the state of one conversation as the user sees it: the
session row, the message list, the running count and the free-tier notices.
It loads or creates the session, then runs each send through the fixed
sequence: provisional user message, persist it, ask the assistant, append
and persist the answer, update the session.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from aboga.core.constants import (
    DEFAULT_SESSION_TITLE,
    LIMIT_NOTICE_DETAIL,
    LIMIT_NOTICE_TITLE,
    MAX_FREE_MESSAGES,
    QUOTA_WARNING_MARGIN,
    SESSION_TITLE_MAX_LENGTH,
    USAGE_COUNTER_TEMPLATE,
)
from aboga.core.exceptions import BackendError
from aboga.core.security import AuthContext
from aboga.models.base import utc_now_iso
from aboga.schemas import ChatMessage, ChatSession, MessageRole, QuotaInfo
from aboga.services.data_store import DataStore

logger = logging.getLogger(__name__)


class QuotaState(str, Enum):
    OK = "ok"
    WARNING = "warning"
    EXHAUSTED = "exhausted"


class ViewPhase(str, Enum):
    INIT = "init"
    LOADED = "loaded"
    SENDING = "sending"


class SendStatus(str, Enum):
    IGNORED = "ignored"
    BLOCKED = "blocked"
    SENT = "sent"
    FAILED = "failed"


def check_quota(count: int, authenticated: bool, limit: int = MAX_FREE_MESSAGES) -> QuotaState:
    """Free-tier state for a message count; signed-in users have no limit."""
    if authenticated:
        return QuotaState.OK
    if count >= limit:
        return QuotaState.EXHAUSTED
    if count >= limit - QUOTA_WARNING_MARGIN:
        return QuotaState.WARNING
    return QuotaState.OK


def limit_notice(limit: int = MAX_FREE_MESSAGES) -> str:
    return f"{LIMIT_NOTICE_TITLE.format(limit=limit)}. {LIMIT_NOTICE_DETAIL}"


def usage_label(count: int, limit: int = MAX_FREE_MESSAGES) -> str:
    return USAGE_COUNTER_TEMPLATE.format(used=count, limit=limit)


@dataclass
class SendOutcome:
    status: SendStatus
    user_message: Optional[ChatMessage] = None
    assistant_message: Optional[ChatMessage] = None
    error: Optional[str] = None


class ChatView:
    """
    State and actions of a single chat view.

    The store, assistant and auth context are passed in; the view keeps no
    process-wide state. `assistant` is anything with
    `async respond(query) -> StructuredResponse`.
    """

    def __init__(self, store: DataStore, assistant, auth: AuthContext, quota: int = MAX_FREE_MESSAGES):
        self.store = store
        self.assistant = assistant
        self.auth = auth
        self.quota = quota

        self.session: Optional[ChatSession] = None
        self.messages: List[ChatMessage] = []
        self.message_count = 0
        self.sending = False
        self.show_limit_warning = False
        self.notice: Optional[str] = None
        self.phase = ViewPhase.INIT

    @property
    def session_id(self) -> Optional[str]:
        return self.session.id if self.session else None

    def quota_state(self) -> QuotaState:
        return check_quota(self.message_count, self.auth.is_authenticated, self.quota)

    def quota_info(self) -> QuotaInfo:
        state = self.quota_state()
        label = None if self.auth.is_authenticated else usage_label(self.message_count, self.quota)
        return QuotaInfo(state=state.value, used=self.message_count, limit=self.quota, label=label)

    async def load(self, session_id: str) -> bool:
        """Hydrate an existing session; False when the backend does not know it."""
        session = await self.store.get_session(session_id)
        if session is None:
            return False

        self.session = session
        self.message_count = session.message_count
        self.messages = await self.store.list_messages(session.id)
        self.phase = ViewPhase.LOADED
        self._refresh_warning()
        logger.debug(f"Loaded chat session {session.id} with {len(self.messages)} messages")
        return True

    async def initialize(self, cached_session_id: Optional[str] = None) -> str:
        """
        Load the cached session or create a new one.

        Returns the session id the client should cache.
        """
        if cached_session_id:
            try:
                if await self.load(cached_session_id):
                    return self.session.id
                logger.info(f"Cached chat session {cached_session_id} not found, creating a new one")
            except BackendError as e:
                logger.warning(f"Could not load cached chat session {cached_session_id}, creating a new one: {e.message}")

        self.session = await self.store.create_session(self.auth.user_id, DEFAULT_SESSION_TITLE)
        self.messages = []
        self.message_count = 0
        self.phase = ViewPhase.LOADED
        self._refresh_warning()
        logger.info(f"Created chat session {self.session.id}")
        return self.session.id

    def _refresh_warning(self) -> None:
        if self.quota_state() is not QuotaState.OK:
            self.show_limit_warning = True
            self.notice = limit_notice(self.quota)

    def _append_local(self, role: MessageRole, content: str, structured_response=None) -> ChatMessage:
        message = ChatMessage(
            id=str(uuid.uuid4()),
            session_id=self.session.id,
            role=role,
            content=content,
            structured_response=structured_response,
            created_at=utc_now_iso(),
            provisional=True,
        )
        self.messages.append(message)
        return message

    def _reconcile(self, provisional: ChatMessage, stored: ChatMessage) -> ChatMessage:
        """Swap a provisional message for its persisted row."""
        for index, message in enumerate(self.messages):
            if message is provisional:
                self.messages[index] = stored
                break
        return stored

    async def send(self, text: str) -> SendOutcome:
        """Send a user message and record the assistant's answer."""
        content = (text or "").strip()
        if not content or self.session is None or self.sending:
            return SendOutcome(status=SendStatus.IGNORED)

        if not self.auth.is_authenticated and self.message_count >= self.quota:
            self.show_limit_warning = True
            self.notice = limit_notice(self.quota)
            logger.info(f"Free message quota reached for session {self.session.id}")
            return SendOutcome(status=SendStatus.BLOCKED)

        self.sending = True
        self.phase = ViewPhase.SENDING
        outcome = SendOutcome(status=SendStatus.FAILED)
        session_id = self.session.id

        try:
            local_user = self._append_local(MessageRole.USER, content)
            outcome.user_message = local_user
            stored_user = await self.store.add_message(session_id, MessageRole.USER, content)
            outcome.user_message = self._reconcile(local_user, stored_user)

            answer = await self.assistant.respond(content)

            local_assistant = self._append_local(MessageRole.ASSISTANT, answer.resumen_corto, answer)
            outcome.assistant_message = local_assistant
            stored_assistant = await self.store.add_message(
                session_id, MessageRole.ASSISTANT, answer.resumen_corto, answer
            )
            outcome.assistant_message = self._reconcile(local_assistant, stored_assistant)

            new_count = self.message_count + 2
            self.message_count = new_count
            self.session = await self.store.update_session(
                session_id, new_count, content[:SESSION_TITLE_MAX_LENGTH]
            )

            if not self.auth.is_authenticated and new_count >= self.quota - QUOTA_WARNING_MARGIN:
                self.show_limit_warning = True
                self.notice = limit_notice(self.quota)

            outcome.status = SendStatus.SENT
            logger.info(f"Message exchange stored for session {session_id} (count={new_count})")
        except Exception as e:
            logger.error(f"Error sending message in session {session_id}: {e}")
            outcome.error = str(e)
        finally:
            self.sending = False
            self.phase = ViewPhase.LOADED

        return outcome
