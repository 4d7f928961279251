"""
Unit tests for parsing generative output.
"""

import json

import pytest

from aboga.core.exceptions import GenerativeEndpointError
from aboga.services.response_processor import (
    ERROR_NOTE,
    ERROR_SUMMARY,
    INCOMPLETE_JSON_MESSAGE,
    NO_JSON_MESSAGE,
    build_error_response,
    coerce_stored_response,
    extract_json_object,
    parse_structured_response,
)


class TestExtractJsonObject:
    def test_surrounding_text_is_ignored(self):
        text = 'prefix {"tipo_consulta":"X","resumen_corto":"Y"} suffix'
        assert extract_json_object(text) == '{"tipo_consulta":"X","resumen_corto":"Y"}'

    def test_spans_nested_objects_and_newlines(self):
        text = 'Claro:\n```json\n{"a": {"b": 1},\n "c": [{"d": 2}]}\n```'
        assert json.loads(extract_json_object(text)) == {"a": {"b": 1}, "c": [{"d": 2}]}

    def test_no_braces(self):
        assert extract_json_object("sin json") is None
        assert extract_json_object("") is None


class TestParseStructuredResponse:
    def test_prefix_and_suffix(self):
        result = parse_structured_response('prefix {"tipo_consulta":"X","resumen_corto":"Y"} suffix')
        assert result.tipo_consulta == "X"
        assert result.resumen_corto == "Y"
        assert result.requisitos == []
        assert result.fuentes == []

    def test_full_payload(self):
        payload = {
            "ambito": "Perú",
            "tipo_consulta": "Poder simple",
            "resumen_corto": "Documento para autorizar a un tercero.",
            "requisitos": ["DNI"],
            "pasos": ["Paso 1: Redactar"],
            "documentos_modelo": [{"nombre": "Poder", "contenido": "Yo, ..."}],
            "campos_minimos_para_redaccion": [{"campo": "Nombre", "tipo": "text", "obligatorio": True}],
            "fuentes": [{"nombre": "Código Civil", "url": None}],
            "campo_extra": "ignorado",
        }
        result = parse_structured_response(json.dumps(payload))
        assert result.documentos_modelo[0].nombre == "Poder"
        assert result.campos_minimos_para_redaccion[0].obligatorio is True
        assert result.fuentes[0].url == ""

    def test_truncated_json(self):
        with pytest.raises(GenerativeEndpointError) as exc_info:
            parse_structured_response('{"tipo_consulta": "X", "resumen_corto": "Y"')
        assert exc_info.value.message == NO_JSON_MESSAGE

    def test_malformed_json(self):
        with pytest.raises(GenerativeEndpointError) as exc_info:
            parse_structured_response('{"tipo_consulta": X}')
        assert exc_info.value.message == NO_JSON_MESSAGE

    def test_missing_summary(self):
        with pytest.raises(GenerativeEndpointError) as exc_info:
            parse_structured_response('{"tipo_consulta": "X"}')
        assert exc_info.value.message == INCOMPLETE_JSON_MESSAGE

    def test_wrong_field_type(self):
        with pytest.raises(GenerativeEndpointError) as exc_info:
            parse_structured_response('{"tipo_consulta": "X", "resumen_corto": "Y", "pasos": "uno"}')
        assert exc_info.value.message == INCOMPLETE_JSON_MESSAGE


class TestErrorResponse:
    def test_shape(self):
        result = build_error_response("Error de API de Gemini: 500")
        assert result.tipo_consulta == "Error en procesamiento"
        assert result.resumen_corto == ERROR_SUMMARY
        assert result.alertas_legales == ["Error de API de Gemini: 500"]
        assert result.requisitos == []
        assert result.pasos == []
        assert result.documentos_modelo == []
        assert result.fuentes == []
        assert result.nota == ERROR_NOTE


class TestCoerceStoredResponse:
    def test_none(self):
        assert coerce_stored_response(None) is None

    def test_valid_dict(self):
        result = coerce_stored_response({"tipo_consulta": "X", "resumen_corto": "Y"})
        assert result.tipo_consulta == "X"

    def test_json_string(self):
        assert coerce_stored_response('{"tipo_consulta": "X", "resumen_corto": "Y"}').resumen_corto == "Y"

    def test_invalid_payload_is_dropped(self):
        assert coerce_stored_response({"tipo_consulta": "X", "pasos": 3}) is None
        assert coerce_stored_response({"requisitos": []}) is None
        assert coerce_stored_response("no es json") is None
