"""
Profiles, lawyers and consultation requests.
"""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, JSON, String, Text

from aboga.models.base import Base, new_id, utc_now_iso


class Profile(Base):
    """Public profile of an authenticated or anonymous user."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=True)
    display_name = Column(String(100), nullable=False, default="")
    is_anonymous = Column(Boolean, nullable=False, default=False)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    updated_at = Column(String, nullable=False, default=utc_now_iso, onupdate=utc_now_iso)

    def __repr__(self):
        return f"<Profile(id={self.id}, email='{self.email}', anonymous={self.is_anonymous})>"


class Lawyer(Base):
    """A lawyer listed in the consultation directory."""
    __tablename__ = "lawyers"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(150), nullable=False)
    license_number = Column(String(50), nullable=False)
    specialties = Column(JSON, nullable=False, default=list)
    years_experience = Column(Integer, nullable=False, default=0)
    bio = Column(Text, nullable=False, default="")
    hourly_rate_min = Column(Float, nullable=False, default=0)
    hourly_rate_max = Column(Float, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0, index=True)
    total_consultations = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(String, nullable=False, default=utc_now_iso)

    def __repr__(self):
        return f"<Lawyer(id={self.id}, name='{self.full_name}', rating={self.rating})>"


class Consultation(Base):
    """
    A request to be paired with a lawyer. Status changes after creation are
    handled outside this service.
    """
    __tablename__ = "consultations"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    lawyer_id = Column(String(36), ForeignKey("lawyers.id"), nullable=False, index=True)
    chat_session_id = Column(String(36), ForeignKey("chat_sessions.id"), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    agreed_rate = Column(Float, nullable=True)
    notes = Column(Text, nullable=False, default="")
    scheduled_at = Column(String, nullable=True)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    updated_at = Column(String, nullable=False, default=utc_now_iso, onupdate=utc_now_iso)

    def __repr__(self):
        return f"<Consultation(id={self.id}, lawyer_id={self.lawyer_id}, status='{self.status}')>"
