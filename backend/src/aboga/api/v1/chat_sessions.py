import logging
from typing import Literal, Set

from fastapi import APIRouter, Depends, Query

from aboga.api.deps import get_app_config, get_auth_context, get_chat_assistant, get_data_store
from aboga.core.config import Config
from aboga.core.constants import SUGGESTED_QUERIES, UPCOMING_FEATURES
from aboga.core.exceptions import AbogaError
from aboga.core.response_utils import ResponseTimer
from aboga.core.security import AuthContext, InputValidator
from aboga.schemas import (
    ChatInitRequest,
    ChatMessageCreate,
    ChatViewResponse,
    SendMessageResponse,
    StandardResponse,
)
from aboga.services.chat_view import ChatView, SendStatus
from aboga.services.data_store import DataStore
from aboga.services.message_renderer import render_messages, to_markdown

logger = logging.getLogger(__name__)
router = APIRouter()

# Sessions with a send in progress in this process
_sending_sessions: Set[str] = set()

SESSION_NOT_FOUND = "Chat session not found"


def build_chat_view(store: DataStore, assistant, auth: AuthContext, config: Config) -> ChatView:
    return ChatView(store, assistant, auth, quota=config.application.free_message_quota)


def snapshot(view: ChatView, markdown: bool = False) -> dict:
    """Fields shared by every chat view response."""
    rendered = render_messages(view.messages)
    return {
        "session": view.session,
        "cached_session_id": view.session_id,
        "messages": view.messages,
        "rendered": [message.to_dict() for message in rendered],
        "markdown": "\n".join(to_markdown(message) for message in rendered) if markdown else None,
        "message_count": view.message_count,
        "show_limit_warning": view.show_limit_warning,
        "notice": view.notice,
        "quota": view.quota_info(),
    }


@router.post("/sessions/init", response_model=StandardResponse)
async def init_chat_session(
    request: ChatInitRequest,
    store: DataStore = Depends(get_data_store),
    assistant=Depends(get_chat_assistant),
    auth: AuthContext = Depends(get_auth_context),
    config: Config = Depends(get_app_config),
):
    """Load the cached chat session or start a new one."""
    with ResponseTimer() as timer:
        try:
            view = build_chat_view(store, assistant, auth, config)
            await view.initialize(request.cached_session_id)
            return timer.success(ChatViewResponse(**snapshot(view)))

        except AbogaError as e:
            logger.error(f"Error initializing chat session: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error initializing chat session: {e}")
            return timer.error("Failed to initialize chat session", 500)


@router.get("/sessions/{session_id}/messages", response_model=StandardResponse)
async def get_chat_messages(
    session_id: str,
    format: Literal["json", "markdown"] = Query("json", description="'markdown' also returns the conversation as text"),
    store: DataStore = Depends(get_data_store),
    assistant=Depends(get_chat_assistant),
    auth: AuthContext = Depends(get_auth_context),
    config: Config = Depends(get_app_config),
):
    """Get a chat session with its message history."""
    with ResponseTimer() as timer:
        try:
            view = build_chat_view(store, assistant, auth, config)
            if not await view.load(session_id):
                return timer.error(SESSION_NOT_FOUND, 404)

            return timer.success(ChatViewResponse(**snapshot(view, markdown=format == "markdown")))

        except AbogaError as e:
            logger.error(f"Error getting messages for chat session {session_id}: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error getting messages for chat session {session_id}: {e}")
            return timer.error("Failed to get chat messages", 500)


@router.post("/sessions/{session_id}/messages", response_model=StandardResponse)
async def send_chat_message(
    session_id: str,
    message: ChatMessageCreate,
    store: DataStore = Depends(get_data_store),
    assistant=Depends(get_chat_assistant),
    auth: AuthContext = Depends(get_auth_context),
    config: Config = Depends(get_app_config),
):
    """Send a user message and return the assistant's answer."""
    with ResponseTimer() as timer:
        content = InputValidator.validate_query(message.content, config.application.max_query_length)
        if not content:
            return timer.error("El mensaje no puede estar vacío", 400)

        if session_id in _sending_sessions:
            return timer.error("Ya hay un mensaje en proceso para esta sesión", 409)

        _sending_sessions.add(session_id)
        try:
            view = build_chat_view(store, assistant, auth, config)
            if not await view.load(session_id):
                return timer.error(SESSION_NOT_FOUND, 404)

            outcome = await view.send(content)
            data = SendMessageResponse(
                **snapshot(view),
                status=outcome.status.value,
                assistant_message=outcome.assistant_message,
            )

            if outcome.status is SendStatus.BLOCKED:
                return timer.error(view.notice, 429, details=data.model_dump(mode="json"))

            if outcome.status is SendStatus.FAILED:
                return timer.error(
                    "Failed to send message",
                    500,
                    errors=[outcome.error] if outcome.error else None,
                    details=data.model_dump(mode="json"),
                )

            return timer.success(data, status_code=201)

        except AbogaError as e:
            logger.error(f"Error sending message to chat session {session_id}: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error sending message to chat session {session_id}: {e}")
            return timer.error("Failed to send message", 500)
        finally:
            _sending_sessions.discard(session_id)


@router.get("/suggestions", response_model=StandardResponse)
async def get_suggestions():
    """Starter prompts shown on an empty conversation."""
    with ResponseTimer() as timer:
        return timer.success(SUGGESTED_QUERIES)


@router.get("/features", response_model=StandardResponse)
async def get_features():
    """Contact channels and whether they are available yet."""
    with ResponseTimer() as timer:
        return timer.success(UPCOMING_FEATURES)
