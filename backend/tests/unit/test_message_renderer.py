"""
Unit tests for the message renderer and copy tracker.
"""

from aboga.schemas import ChatMessage, MessageRole
from aboga.services.message_renderer import CopyTracker, render_message, to_markdown
from aboga.services.response_templates import QueryType, get_template


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def assistant_message(query_type=None, content="resumen"):
    payload = get_template(query_type) if query_type else None
    return ChatMessage(
        id="m2",
        session_id="s1",
        role=MessageRole.ASSISTANT,
        content=content,
        structured_response=payload,
    )


class TestRenderMessage:
    def test_user_message_is_right_bubble(self):
        message = ChatMessage(id="m1", session_id="s1", role=MessageRole.USER, content="hola")
        rendered = render_message(message)
        assert rendered.kind == "bubble"
        assert rendered.align == "right"
        assert rendered.text == "hola"

    def test_assistant_without_payload_is_left_bubble(self):
        rendered = render_message(assistant_message(content="Texto plano"))
        assert rendered.kind == "bubble"
        assert rendered.align == "left"
        assert rendered.text == "Texto plano"

    def test_structured_card(self):
        rendered = render_message(assistant_message(QueryType.NOTARIAL_LETTER))

        assert rendered.kind == "card"
        assert rendered.title == "Carta notarial de requerimiento"
        assert rendered.summary.startswith("Documento formal con fe notarial")
        assert [section.title for section in rendered.sections] == [
            "Alertas Legales", "Requisitos", "Pasos a seguir", "Plazos", "Costos estimados",
        ]
        assert len(rendered.documents) == 1
        assert rendered.documents[0].copy_label == "Copiar"
        assert [source.name for source in rendered.sources] == [
            "Ley del Notariado (D. Leg. 1049)", "Colegio de Notarios de Lima",
        ]
        assert rendered.note.startswith("Información general")

    def test_empty_list_sections_are_omitted(self):
        rendered = render_message(assistant_message(QueryType.GENERAL))
        assert [section.key for section in rendered.sections] == ["plazos", "costos_estimados"]
        assert rendered.documents == []
        assert rendered.sources == []

    def test_to_dict_includes_copy_label(self):
        data = render_message(assistant_message(QueryType.EVICTION)).to_dict()
        assert data["documents"][0]["copy_label"] == "Copiar"
        assert data["kind"] == "card"


class TestCopyTracker:
    def test_marks_only_copied_index(self):
        clock = FakeClock()
        copied_text = []
        tracker = CopyTracker(clock=clock, clipboard=copied_text.append)

        tracker.copy(1, "documento")

        assert copied_text == ["documento"]
        assert tracker.is_copied(1)
        assert not tracker.is_copied(0)

    def test_clears_after_two_seconds(self):
        clock = FakeClock()
        tracker = CopyTracker(clock=clock)
        tracker.copy(0, "texto")

        clock.now += 1.9
        assert tracker.is_copied(0)

        clock.now += 0.1
        assert not tracker.is_copied(0)
        assert tracker.copied_index is None

    def test_new_copy_moves_mark(self):
        clock = FakeClock()
        tracker = CopyTracker(clock=clock)
        tracker.copy(0, "a")
        clock.now += 1.0
        tracker.copy(1, "b")

        assert not tracker.is_copied(0)
        assert tracker.is_copied(1)

        clock.now += 1.5
        assert tracker.is_copied(1)

    def test_render_reflects_copied_state(self):
        clock = FakeClock()
        tracker = CopyTracker(clock=clock)
        message = assistant_message(QueryType.SALE_CONTRACT)
        tracker.copy(0, message.structured_response.documentos_modelo[0].contenido)

        assert render_message(message, tracker).documents[0].copy_label == "Copiado"

        clock.now += 2.0
        assert render_message(message, tracker).documents[0].copy_label == "Copiar"


class TestMarkdown:
    def test_card_markdown(self):
        markdown = to_markdown(render_message(assistant_message(QueryType.NOTARIAL_LETTER)))

        assert markdown.startswith("### Carta notarial de requerimiento")
        assert "**Requisitos**\n- DNI o RUC del remitente" in markdown
        assert "1. Paso 1: Redactar la carta" in markdown
        assert "**Documentos modelo**" in markdown
        assert "- [Colegio de Notarios de Lima](https://www.cnl.org.pe)" in markdown
        assert "- Ley del Notariado (D. Leg. 1049)" in markdown
        assert "> Información general." in markdown

    def test_bubble_markdown_is_plain_text(self):
        message = ChatMessage(id="m1", session_id="s1", role=MessageRole.USER, content="hola")
        assert to_markdown(render_message(message)) == "hola"
