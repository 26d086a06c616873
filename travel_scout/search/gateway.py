from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Protocol

from ..catalog.models import CatalogIndex
from .errors import ResponseFormatError, SearchValidationError, ServiceError
from .guardrail import enforce_guardrail
from .models import SearchOutcome, SearchResponse
from .parsing import parse_response
from .prompt import build_prompt
from .validation import validate_request

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class SearchStage(str, Enum):
    received = "received"
    validating = "validating"
    prompting = "prompting"
    invoking = "invoking"
    parsing = "parsing"
    filtering = "filtering"
    responded = "responded"


class ReasoningClient(Protocol):
    def invoke(self, instructions: str, context: str) -> str: ...


def _failure(status_code: int, message: str) -> SearchOutcome:
    return SearchOutcome(
        status_code=status_code,
        response=SearchResponse(results=[], error=message),
    )


class SearchGateway:
    """
    Runs one search request through validate -> prompt -> LLM -> parse -> guardrail.

    Validation problems come back as 400 with their message; everything that
    goes wrong afterwards is logged and returned as a generic 500.
    """

    def __init__(self, catalog: CatalogIndex, client: ReasoningClient) -> None:
        self.catalog = catalog
        self.client = client

    def handle(self, payload: Any) -> SearchOutcome:
        start_time = time.time()
        stage = SearchStage.received
        try:
            stage = SearchStage.validating
            request = validate_request(payload, self.catalog)

            stage = SearchStage.prompting
            prompt = build_prompt(request, self.catalog)

            stage = SearchStage.invoking
            raw = self.client.invoke(prompt.instructions, prompt.context)

            stage = SearchStage.parsing
            candidates = parse_response(raw)

            stage = SearchStage.filtering
            results = enforce_guardrail(candidates, self.catalog)

        except SearchValidationError as exc:
            logger.info("Search rejected (%s): %s", exc.kind.value, exc.message)
            return _failure(400, exc.message)
        except ServiceError:
            logger.warning("LLM call failed", exc_info=True)
            return _failure(500, INTERNAL_ERROR_MESSAGE)
        except ResponseFormatError:
            logger.warning("LLM reply rejected at %s stage", stage.value, exc_info=True)
            return _failure(500, INTERNAL_ERROR_MESSAGE)
        except Exception:
            logger.exception("Unexpected failure at %s stage", stage.value)
            return _failure(500, INTERNAL_ERROR_MESSAGE)

        stage = SearchStage.responded
        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            "Search %s with %d result(s) from %d candidate(s) in %sms",
            stage.value, len(results), len(candidates), elapsed_ms,
        )
        return SearchOutcome(status_code=200, response=SearchResponse(results=results))
