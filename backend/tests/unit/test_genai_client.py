"""
Unit tests for the generative endpoint client.
"""

import json

import httpx
import pytest

from aboga.core.config import GenerativeConfig
from aboga.core.constants import SYSTEM_PROMPT
from aboga.services.genai_client import (
    MISSING_KEY_MESSAGE,
    NO_CANDIDATES_MESSAGE,
    GenerativeEndpointClient,
    build_request_body,
)

ERROR_TYPE = "Error en procesamiento"


def candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler, api_key="test-key"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    config = GenerativeConfig(gemini_api_key=api_key, gemini_model="gemini-test")
    return GenerativeEndpointClient(config, http_client=http_client)


class TestRequestBody:
    def test_prompt_and_parameters(self):
        body = build_request_body("¿Qué es un poder?")
        text = body["contents"][0]["parts"][0]["text"]
        assert text.startswith(SYSTEM_PROMPT)
        assert text.endswith("\n\nConsulta del usuario: ¿Qué es un poder?")
        assert body["generationConfig"] == {"temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 4096}
        assert len(body["safetySettings"]) == 4
        assert all(setting["threshold"] == "BLOCK_MEDIUM_AND_ABOVE" for setting in body["safetySettings"])


class TestGenerate:
    @pytest.mark.asyncio
    async def test_success_with_surrounding_text(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=candidate('prefix {"tipo_consulta":"X","resumen_corto":"Y"} suffix'))

        result = await make_client(handler).generate("hola")

        assert result.tipo_consulta == "X"
        assert result.resumen_corto == "Y"
        assert seen["url"].params["key"] == "test-key"
        assert seen["url"].path.endswith("/gemini-test:generateContent")
        assert seen["body"]["contents"][0]["parts"][0]["text"].endswith("Consulta del usuario: hola")

    @pytest.mark.asyncio
    async def test_http_500(self):
        client = make_client(lambda request: httpx.Response(500, json={"error": "boom"}))
        result = await client.generate("hola")
        assert result.tipo_consulta == ERROR_TYPE
        assert result.alertas_legales[0].startswith("Error de API de Gemini: 500")

    @pytest.mark.asyncio
    async def test_empty_candidates(self):
        client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))
        result = await client.generate("hola")
        assert result.tipo_consulta == ERROR_TYPE
        assert result.alertas_legales == [NO_CANDIDATES_MESSAGE]

    @pytest.mark.asyncio
    async def test_candidate_without_parts(self):
        client = make_client(lambda request: httpx.Response(200, json={"candidates": [{"finishReason": "SAFETY"}]}))
        result = await client.generate("hola")
        assert result.alertas_legales == [NO_CANDIDATES_MESSAGE]

    @pytest.mark.asyncio
    async def test_truncated_json(self):
        client = make_client(lambda request: httpx.Response(200, json=candidate('{"tipo_consulta": "X", "resumen')))
        result = await client.generate("hola")
        assert result.tipo_consulta == ERROR_TYPE
        assert result.alertas_legales == ["La respuesta no contiene JSON válido"]

    @pytest.mark.asyncio
    async def test_missing_required_fields(self):
        client = make_client(lambda request: httpx.Response(200, json=candidate('{"tipo_consulta": "X"}')))
        result = await client.generate("hola")
        assert result.alertas_legales == ["Respuesta JSON incompleta"]

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await make_client(handler).generate("hola")
        assert result.tipo_consulta == ERROR_TYPE
        assert "connection refused" in result.alertas_legales[0]

    @pytest.mark.asyncio
    async def test_missing_api_key_makes_no_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=candidate("{}"))

        result = await make_client(handler, api_key="").generate("hola")
        assert result.tipo_consulta == ERROR_TYPE
        assert result.alertas_legales == [MISSING_KEY_MESSAGE]
        assert calls == []
