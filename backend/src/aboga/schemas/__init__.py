"""
Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, Dict, Any, Generic, TypeVar, List, Literal
from datetime import datetime, timezone
from enum import Enum


# Generic type for response data
T = TypeVar('T')


class Metadata(BaseModel):
    """Standard metadata for API responses."""
    statusCode: int = Field(..., description="HTTP status code")
    errors: List[str] = Field(default_factory=list, description="List of error messages")
    executionTime: float = Field(..., description="Request execution time in seconds")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Response timestamp")


class StandardResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""
    data: T = Field(..., description="Response data")
    metadata: Metadata = Field(..., description="Response metadata")
    success: int = Field(..., description="Success indicator (1 for success, 0 for failure)")


class ErrorResponse(BaseModel):
    """Error response schema."""
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


# Structured legal-information payload
class ModelDocument(BaseModel):
    """A ready-to-copy document template with placeholder fields."""
    nombre: str = ""
    contenido: str = ""


class InputField(BaseModel):
    """A field the user must supply before a document can be drafted."""
    campo: str = ""
    tipo: str = "text"
    obligatorio: bool = False


class Source(BaseModel):
    """A legal source; url is empty when there is no public link."""
    nombre: str = ""
    url: str = ""

    @model_validator(mode="before")
    @classmethod
    def null_url_to_empty(cls, data):
        if isinstance(data, dict) and data.get("url") is None:
            data = {**data, "url": ""}
        return data


class StructuredResponse(BaseModel):
    """
    Fixed-shape answer to a legal query. Every field defaults to an empty
    string or collection so the payload is never missing a key.
    """
    model_config = ConfigDict(extra="ignore")

    ambito: str = ""
    tipo_consulta: str = ""
    resumen_corto: str = ""
    requisitos: List[str] = Field(default_factory=list)
    pasos: List[str] = Field(default_factory=list)
    plazos: str = ""
    costos_estimados: str = ""
    documentos_modelo: List[ModelDocument] = Field(default_factory=list)
    campos_minimos_para_redaccion: List[InputField] = Field(default_factory=list)
    alertas_legales: List[str] = Field(default_factory=list)
    fuentes: List[Source] = Field(default_factory=list)
    nota: str = ""

    def has_required_fields(self) -> bool:
        """Query type and summary are the minimum a usable answer carries."""
        return bool(self.tipo_consulta.strip()) and bool(self.resumen_corto.strip())


# Persisted rows
class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ConsultationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChatSession(BaseModel):
    """A chat session row."""
    id: str
    user_id: Optional[str] = None
    title: str = ""
    message_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ChatMessage(BaseModel):
    """
    A chat message row. `provisional` is local-only state: it marks a
    message appended before the backend acknowledged it.
    """
    id: str
    session_id: str
    role: MessageRole
    content: str
    structured_response: Optional[StructuredResponse] = None
    created_at: Optional[str] = None
    provisional: bool = Field(default=False, exclude=True)


class Profile(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: str = ""
    is_anonymous: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Lawyer(BaseModel):
    """A lawyer available for consultation."""
    id: str
    full_name: str
    license_number: str
    specialties: List[str] = Field(default_factory=list)
    years_experience: int = 0
    bio: str = ""
    hourly_rate_min: float = Field(default=0, ge=0)
    hourly_rate_max: float = Field(default=0, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    total_consultations: int = 0
    available: bool = True
    created_at: Optional[str] = None

    @model_validator(mode="after")
    def check_rate_range(self):
        if self.hourly_rate_min > self.hourly_rate_max:
            raise ValueError("hourly_rate_min must not exceed hourly_rate_max")
        return self

    @property
    def midpoint_rate(self) -> float:
        """Rate proposed by default when requesting a consultation."""
        return (self.hourly_rate_min + self.hourly_rate_max) / 2


class ConsultationCreate(BaseModel):
    user_id: str
    lawyer_id: str
    chat_session_id: Optional[str] = None
    status: ConsultationStatus = ConsultationStatus.PENDING
    agreed_rate: Optional[float] = None
    notes: str = ""
    scheduled_at: Optional[str] = None


class Consultation(ConsultationCreate):
    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# API request bodies
class ChatInitRequest(BaseModel):
    """Body of the chat init call; carries the client's cached session id."""
    cached_session_id: Optional[str] = Field(None, description="Session id kept in the client's local storage")


class ChatMessageCreate(BaseModel):
    """Schema for sending a user message."""
    content: str = Field(..., max_length=10000, description="Message content")


class ConsultationRequest(BaseModel):
    """Schema for requesting a consultation with a lawyer."""
    chat_session_id: Optional[str] = Field(None, description="Chat session to attach to the request")
    notes: Optional[str] = Field(None, max_length=2000, description="Extra notes for the lawyer")


# API response bodies
class QuotaInfo(BaseModel):
    state: Literal["ok", "warning", "exhausted"]
    used: int
    limit: int
    label: Optional[str] = Field(None, description="Usage counter shown to unauthenticated users")


class ChatViewResponse(BaseModel):
    """Snapshot of a chat view after init or send."""
    session: ChatSession
    cached_session_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    rendered: List[Dict[str, Any]] = Field(default_factory=list, description="Presentation model of each message")
    markdown: Optional[str] = Field(None, description="Conversation flattened to Markdown, when requested")
    message_count: int = 0
    show_limit_warning: bool = False
    notice: Optional[str] = None
    quota: QuotaInfo


class SendMessageResponse(ChatViewResponse):
    status: str
    assistant_message: Optional[ChatMessage] = None


class AuthContextResponse(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None
    is_authenticated: bool = False
    is_anonymous: bool = False
    profile: Optional[Profile] = None


class ConsultationOutcomeResponse(BaseModel):
    success: bool
    message: str
    consultation: Optional[Consultation] = None
