"""
Database models.
"""

# Import all models to ensure they are registered with SQLAlchemy
from .base import Base
from .chat import ChatSession, ChatMessage
from .directory import Profile, Lawyer, Consultation

__all__ = ["Base", "ChatSession", "ChatMessage", "Profile", "Lawyer", "Consultation"]
