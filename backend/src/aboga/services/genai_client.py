"""
Generative-language endpoint client.

Sends a single generateContent request per query (system prompt followed by
the user's text) and converts the reply into a StructuredResponse. Every
failure is folded into the fixed error answer; callers never see an
exception from `generate`.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from aboga.core.config import GenerativeConfig
from aboga.core.constants import GENERATION_CONFIG, SAFETY_SETTINGS, SYSTEM_PROMPT, USER_QUERY_PREFIX
from aboga.core.exceptions import GenerativeEndpointError
from aboga.schemas import StructuredResponse
from aboga.services.response_processor import build_error_response, parse_structured_response

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "GEMINI_API_KEY no configurada. Por favor agrega tu API key en el archivo .env"
NO_CANDIDATES_MESSAGE = "No se recibió respuesta del modelo"

REQUEST_TIMEOUT = 60.0


def build_request_body(query: str) -> Dict[str, Any]:
    """Request payload for a single-turn generateContent call."""
    return {
        "contents": [
            {"parts": [{"text": f"{SYSTEM_PROMPT}\n\n{USER_QUERY_PREFIX}{query}"}]}
        ],
        "generationConfig": dict(GENERATION_CONFIG),
        "safetySettings": [dict(setting) for setting in SAFETY_SETTINGS],
    }


def extract_candidate_text(data: Dict[str, Any]) -> str:
    """Text of the first part of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        raise GenerativeEndpointError(NO_CANDIDATES_MESSAGE)
    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerativeEndpointError(NO_CANDIDATES_MESSAGE) from e
    if not isinstance(text, str):
        raise GenerativeEndpointError(NO_CANDIDATES_MESSAGE)
    return text


class GenerativeEndpointClient:
    """
    Client for the hosted generative-language API.

    The httpx client can be injected (tests pass one backed by
    httpx.MockTransport); otherwise a short-lived client is opened per call.
    """

    def __init__(self, config: GenerativeConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.config.gemini_api_key)

    async def generate(self, query: str) -> StructuredResponse:
        """Answer a query; returns the error answer on any failure."""
        try:
            return await self._generate(query)
        except GenerativeEndpointError as e:
            logger.error(f"Generative response failed: {e.message}")
            return build_error_response(e.message)
        except httpx.HTTPError as e:
            logger.error(f"Generative endpoint request failed: {e}")
            return build_error_response(str(e) or e.__class__.__name__)
        except Exception as e:
            logger.exception(f"Unexpected error while generating response: {e}")
            return build_error_response(str(e) or e.__class__.__name__)

    async def _generate(self, query: str) -> StructuredResponse:
        if not self.is_configured:
            raise GenerativeEndpointError(MISSING_KEY_MESSAGE)

        body = build_request_body(query)
        params = {"key": self.config.gemini_api_key}

        if self.http_client is not None:
            response = await self.http_client.post(self.config.endpoint_url, params=params, json=body)
        else:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
                response = await client.post(self.config.endpoint_url, params=params, json=body)

        if response.is_error:
            logger.error(f"Generative endpoint returned {response.status_code}: {response.text[:500]}")
            message = f"Error de API de Gemini: {response.status_code} {response.reason_phrase}".strip()
            raise GenerativeEndpointError(message)

        try:
            data = response.json()
        except ValueError as e:
            raise GenerativeEndpointError(NO_CANDIDATES_MESSAGE) from e

        text = extract_candidate_text(data if isinstance(data, dict) else {})
        structured = parse_structured_response(text)
        logger.info(f"Generative response received: {structured.tipo_consulta}")
        return structured
