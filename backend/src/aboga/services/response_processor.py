"""
Response processor for ABOGA.

Turns raw text returned by the generative endpoint into a StructuredResponse,
and builds the fixed error answer shown when anything in that path fails.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from aboga.core.constants import ERROR_QUERY_TYPE
from aboga.core.exceptions import GenerativeEndpointError
from aboga.schemas import StructuredResponse

logger = logging.getLogger(__name__)

# Greedy: spans from the first "{" to the last "}" so nested objects survive
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

NO_JSON_MESSAGE = "La respuesta no contiene JSON válido"
INCOMPLETE_JSON_MESSAGE = "Respuesta JSON incompleta"

ERROR_SUMMARY = "Lo siento, hubo un error al procesar tu consulta. Por favor intenta reformular tu pregunta."
ERROR_NOTE = "Si el problema persiste, por favor verifica tu conexión y vuelve a intentarlo."


def extract_json_object(text: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', if any."""
    if not text:
        return None
    match = JSON_OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


def parse_structured_response(text: str) -> StructuredResponse:
    """
    Parse model output into a StructuredResponse.

    Prose before or after the JSON object is ignored. Raises
    GenerativeEndpointError when no object can be found, when it does not
    decode, or when the query type or summary is missing.
    """
    candidate = extract_json_object(text)
    if candidate is None:
        raise GenerativeEndpointError(NO_JSON_MESSAGE)

    try:
        data: Dict[str, Any] = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Model output contained malformed JSON: {e}")
        raise GenerativeEndpointError(NO_JSON_MESSAGE) from e

    if not isinstance(data, dict):
        raise GenerativeEndpointError(NO_JSON_MESSAGE)

    try:
        response = StructuredResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Model output did not match the response shape: {e}")
        raise GenerativeEndpointError(INCOMPLETE_JSON_MESSAGE) from e

    if not response.has_required_fields():
        raise GenerativeEndpointError(INCOMPLETE_JSON_MESSAGE)

    return response


def build_error_response(message: str) -> StructuredResponse:
    """Fixed answer returned when the generative path fails."""
    return StructuredResponse(
        ambito="Perú",
        tipo_consulta=ERROR_QUERY_TYPE,
        resumen_corto=ERROR_SUMMARY,
        plazos="",
        costos_estimados="",
        alertas_legales=[message],
        nota=ERROR_NOTE,
    )


def coerce_stored_response(value: Any) -> Optional[StructuredResponse]:
    """
    Validate a structured payload read back from storage.

    Rows written by older clients may hold partial or malformed payloads;
    those render as plain text rather than failing the whole history load.
    """
    if value is None or isinstance(value, StructuredResponse):
        return value
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding stored structured response that is not JSON")
            return None
    try:
        response = StructuredResponse.model_validate(value)
    except ValidationError as e:
        logger.warning(f"Discarding invalid stored structured response: {e}")
        return None
    if not response.has_required_fields():
        logger.warning("Discarding stored structured response without query type or summary")
        return None
    return response
