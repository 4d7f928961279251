"""
Assistant strategies.

Both strategies expose the same coroutine, `respond(query)`, returning a
StructuredResponse. The keyword strategy answers from the template store;
the generative strategy calls the hosted model.
"""

import logging
from enum import Enum
from typing import Optional, Union

import httpx

from aboga.core.config import Config, get_config
from aboga.schemas import StructuredResponse
from aboga.services.genai_client import GenerativeEndpointClient
from aboga.services.query_classifier import QueryClassifier, get_query_classifier

logger = logging.getLogger(__name__)


class ResponseStrategy(str, Enum):
    KEYWORD = "keyword"
    GENERATIVE = "generative"


class KeywordAssistant:
    """Answers from the fixed templates, selected by keyword."""

    strategy = ResponseStrategy.KEYWORD

    def __init__(self, classifier: Optional[QueryClassifier] = None):
        self.classifier = classifier or get_query_classifier()

    async def respond(self, query: str) -> StructuredResponse:
        return self.classifier.dispatch(query)


class GenerativeAssistant:
    """Answers through the generative endpoint."""

    strategy = ResponseStrategy.GENERATIVE

    def __init__(self, client: GenerativeEndpointClient):
        self.client = client

    async def respond(self, query: str) -> StructuredResponse:
        return await self.client.generate(query)


Assistant = Union[KeywordAssistant, GenerativeAssistant]


def get_assistant(
    strategy: Optional[Union[ResponseStrategy, str]] = None,
    config: Optional[Config] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Assistant:
    """Build the assistant for a strategy, defaulting to the configured one."""
    config = config or get_config()
    strategy = ResponseStrategy(strategy or config.application.assistant_strategy)

    if strategy is ResponseStrategy.GENERATIVE:
        logger.debug("Using generative assistant")
        return GenerativeAssistant(GenerativeEndpointClient(config.generative, http_client=http_client))

    return KeywordAssistant()
