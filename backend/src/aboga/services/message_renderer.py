"""
Message renderer for ABOGA.

Turns chat messages into a presentation model: plain bubbles for user text
and for assistant messages without a payload, sectioned cards for
structured answers. The model is serialized as-is by the API and can be
flattened to Markdown for text clients.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Callable, List, Optional

from aboga.core.constants import COPY_ACK_SECONDS
from aboga.schemas import ChatMessage, MessageRole, StructuredResponse

logger = logging.getLogger(__name__)

COPY_LABEL = "Copiar"
COPIED_LABEL = "Copiado"


class CopyTracker:
    """
    Tracks the transient "copied" acknowledgment of model documents.

    Only the most recently copied index is marked, and the mark expires
    `duration` seconds after the copy. The clock and the clipboard sink are
    injectable.
    """

    def __init__(
        self,
        duration: float = COPY_ACK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        clipboard: Optional[Callable[[str], None]] = None,
    ):
        self.duration = duration
        self.clock = clock
        self.clipboard = clipboard
        self._copied_index: Optional[int] = None
        self._copied_at = 0.0

    def copy(self, index: int, text: str) -> None:
        if self.clipboard is not None:
            self.clipboard(text)
        self._copied_index = index
        self._copied_at = self.clock()

    @property
    def copied_index(self) -> Optional[int]:
        if self._copied_index is not None and self.clock() - self._copied_at >= self.duration:
            self._copied_index = None
        return self._copied_index

    def is_copied(self, index: int) -> bool:
        return self.copied_index == index


@dataclass
class RenderedSection:
    key: str
    title: str
    items: List[str] = field(default_factory=list)
    text: str = ""


@dataclass
class RenderedDocument:
    index: int
    name: str
    content: str
    copied: bool = False

    @property
    def copy_label(self) -> str:
        return COPIED_LABEL if self.copied else COPY_LABEL


@dataclass
class RenderedSource:
    name: str
    url: str = ""


@dataclass
class RenderedMessage:
    """Presentation of one message; `kind` is "bubble" or "card"."""
    id: str
    role: str
    kind: str
    align: str
    text: str = ""
    title: str = ""
    summary: str = ""
    sections: List[RenderedSection] = field(default_factory=list)
    documents: List[RenderedDocument] = field(default_factory=list)
    sources: List[RenderedSource] = field(default_factory=list)
    note: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        for document, rendered in zip(data["documents"], self.documents):
            document["copy_label"] = rendered.copy_label
        return data


def _bubble(message: ChatMessage, align: str) -> RenderedMessage:
    return RenderedMessage(
        id=message.id,
        role=MessageRole(message.role).value,
        kind="bubble",
        align=align,
        text=message.content,
    )


def _card(message: ChatMessage, payload: StructuredResponse, copy_tracker: Optional[CopyTracker]) -> RenderedMessage:
    sections: List[RenderedSection] = []

    # List sections appear only when they have items; deadlines and costs always do
    if payload.alertas_legales:
        sections.append(RenderedSection("alertas_legales", "Alertas Legales", items=list(payload.alertas_legales)))
    if payload.requisitos:
        sections.append(RenderedSection("requisitos", "Requisitos", items=list(payload.requisitos)))
    if payload.pasos:
        sections.append(RenderedSection("pasos", "Pasos a seguir", items=list(payload.pasos)))
    sections.append(RenderedSection("plazos", "Plazos", text=payload.plazos))
    sections.append(RenderedSection("costos_estimados", "Costos estimados", text=payload.costos_estimados))

    documents = [
        RenderedDocument(
            index=index,
            name=document.nombre,
            content=document.contenido,
            copied=copy_tracker.is_copied(index) if copy_tracker else False,
        )
        for index, document in enumerate(payload.documentos_modelo)
    ]

    return RenderedMessage(
        id=message.id,
        role=MessageRole.ASSISTANT.value,
        kind="card",
        align="left",
        title=payload.tipo_consulta,
        summary=payload.resumen_corto,
        sections=sections,
        documents=documents,
        sources=[RenderedSource(name=source.nombre, url=source.url) for source in payload.fuentes],
        note=payload.nota,
    )


def render_message(message: ChatMessage, copy_tracker: Optional[CopyTracker] = None) -> RenderedMessage:
    """Render one chat message."""
    if MessageRole(message.role) is MessageRole.USER:
        return _bubble(message, "right")
    if message.structured_response is None:
        return _bubble(message, "left")
    return _card(message, message.structured_response, copy_tracker)


def render_messages(messages: List[ChatMessage]) -> List[RenderedMessage]:
    return [render_message(message) for message in messages]


def to_markdown(rendered: RenderedMessage) -> str:
    """Flatten a rendered message to Markdown."""
    if rendered.kind == "bubble":
        return rendered.text

    lines = [f"### {rendered.title}", "", rendered.summary, ""]
    for section in rendered.sections:
        lines.append(f"**{section.title}**")
        if section.items:
            numbered = section.key == "pasos"
            for position, item in enumerate(section.items, start=1):
                lines.append(f"{position}. {item}" if numbered else f"- {item}")
        else:
            lines.append(section.text)
        lines.append("")

    if rendered.documents:
        lines.append("**Documentos modelo**")
        for document in rendered.documents:
            lines.extend([f"_{document.name}_", "", "```", document.content, "```", ""])

    if rendered.sources:
        lines.append("**Fuentes**")
        for source in rendered.sources:
            lines.append(f"- [{source.name}]({source.url})" if source.url else f"- {source.name}")
        lines.append("")

    if rendered.note:
        lines.append(f"> {rendered.note}")

    return "\n".join(lines).rstrip() + "\n"
