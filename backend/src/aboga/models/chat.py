"""
Chat session and chat message tables.
"""

from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from aboga.core.constants import DEFAULT_SESSION_TITLE
from aboga.models.base import Base, new_id, utc_now_iso


class ChatSession(Base):
    """
    One conversation with the assistant. Anonymous visitors own sessions
    with a null user_id.
    """
    __tablename__ = "chat_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=True, index=True)
    title = Column(String(255), nullable=False, default=DEFAULT_SESSION_TITLE)
    message_count = Column(Integer, nullable=False, default=0)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    updated_at = Column(String, nullable=False, default=utc_now_iso, onupdate=utc_now_iso)

    messages = relationship("ChatMessage", back_populates="session", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<ChatSession(id={self.id}, user_id={self.user_id}, count={self.message_count})>"


class ChatMessage(Base):
    """
    A single user or assistant message. Assistant rows may carry the
    structured legal-information payload as JSON.
    """
    __tablename__ = "chat_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    session_id = Column(String(36), ForeignKey("chat_sessions.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # 'user' or 'assistant'
    content = Column(Text, nullable=False)
    structured_response = Column(JSON, nullable=True)
    created_at = Column(String, nullable=False, default=utc_now_iso, index=True)

    session = relationship("ChatSession", back_populates="messages")

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, session_id={self.session_id}, role='{self.role}')>"
