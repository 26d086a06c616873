from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

from travel_scout.catalog.models import CatalogIndex, CatalogItem
from travel_scout.search.errors import ResponseFormatError, ServiceError
from travel_scout.search.gateway import INTERNAL_ERROR_MESSAGE, SearchGateway
from travel_scout.search.guardrail import FALLBACK_REASON
from travel_scout.search.models import Recommendation

CATALOG = CatalogIndex(items=(
    CatalogItem(id=1, tags=("beach",), price=100),
    CatalogItem(id=2, tags=("hiking",), price=50),
))


def _gateway(reply: str | None = None, side_effect: Exception | None = None):
    client = MagicMock()
    client.invoke.return_value = reply
    client.invoke.side_effect = side_effect
    return SearchGateway(CATALOG, client), client


def _results(outcome):
    return [r.model_dump() for r in outcome.response.results]


def test_scenario_model_choice_passes_through():
    gateway, client = _gateway(json.dumps({"results": [{"id": 2, "reason": "x"}]}))

    outcome = gateway.handle({"selectedTags": ["beach"]})

    assert outcome.status_code == 200
    assert _results(outcome) == [{"id": 2, "reason": "x"}]
    assert outcome.response.error is None
    client.invoke.assert_called_once()


def test_valid_reply_returned_verbatim():
    reply = {"results": [{"id": 2, "reason": "hike"}, {"id": 1, "reason": "beach"}]}
    gateway, _ = _gateway(json.dumps(reply))

    outcome = gateway.handle({"query": "anything"})

    assert _results(outcome) == reply["results"]


def test_ghost_id_falls_back():
    gateway, _ = _gateway(json.dumps({"results": [{"id": 999, "reason": "ghost"}]}))

    outcome = gateway.handle({})

    assert outcome.status_code == 200
    assert outcome.response.results == [Recommendation(id=1, reason=FALLBACK_REASON)]


def test_empty_results_fall_back():
    gateway, _ = _gateway('{"results": []}')

    outcome = gateway.handle({})

    assert outcome.status_code == 200
    assert _results(outcome) == [{"id": 1, "reason": FALLBACK_REASON}]


def test_blank_reply_falls_back():
    gateway, _ = _gateway("")

    assert _results(gateway.handle({})) == [{"id": 1, "reason": FALLBACK_REASON}]


def test_inverted_range_never_calls_service():
    gateway, client = _gateway("{}")

    outcome = gateway.handle({"minPrice": 500, "maxPrice": 100})

    assert outcome.status_code == 400
    assert outcome.response.results == []
    assert outcome.response.error == "Min price cannot exceed max price"
    client.invoke.assert_not_called()


def test_unknown_tag_never_calls_service():
    gateway, client = _gateway("{}")

    outcome = gateway.handle({"selectedTags": ["skiing"]})

    assert outcome.status_code == 400
    assert outcome.response.error == "Invalid tags selected"
    client.invoke.assert_not_called()


def test_non_numeric_price_is_400():
    gateway, client = _gateway("{}")

    outcome = gateway.handle({"minPrice": "cheap"})

    assert outcome.status_code == 400
    assert outcome.response.error == "minPrice and maxPrice must be numbers"
    client.invoke.assert_not_called()


def test_malformed_reply_is_500_without_fallback():
    gateway, _ = _gateway("I think you should visit Paris!")

    outcome = gateway.handle({})

    assert outcome.status_code == 500
    assert outcome.response.results == []
    assert outcome.response.error == INTERNAL_ERROR_MESSAGE


def test_schema_mismatch_is_500():
    gateway, _ = _gateway(json.dumps({"results": [{"id": "1", "reason": "x"}]}))

    outcome = gateway.handle({})

    assert outcome.status_code == 500
    assert outcome.response.results == []


def test_service_failure_is_500_with_generic_message():
    gateway, _ = _gateway(side_effect=ServiceError("Groq request failed: secret detail"))

    outcome = gateway.handle({})

    assert outcome.status_code == 500
    assert outcome.response.error == INTERNAL_ERROR_MESSAGE
    assert "secret" not in outcome.response.error


def test_unexpected_failure_is_500_with_generic_message():
    gateway, _ = _gateway(side_effect=KeyError("boom"))

    outcome = gateway.handle({})

    assert outcome.status_code == 500
    assert outcome.response.results == []
    assert outcome.response.error == INTERNAL_ERROR_MESSAGE


def test_prompt_sent_to_service_contains_catalog_and_constraints():
    gateway, client = _gateway('{"results": []}')

    gateway.handle({"query": "sun", "selectedTags": ["beach"]})

    instructions, context = client.invoke.call_args.args
    assert "Only return IDs that exist in the inventory" in instructions
    assert 'User query: "sun"' in context
    assert '"id": 2' in context


def test_price_beyond_float_range_is_400():
    gateway, client = _gateway("{}")

    outcome = gateway.handle({"maxPrice": 10**400})

    assert outcome.status_code == 400
    assert outcome.response.error == "minPrice and maxPrice must be numbers"
    client.invoke.assert_not_called()


class _TruncatedReply(ResponseFormatError):
    pass


@patch("travel_scout.search.gateway.parse_response", side_effect=_TruncatedReply("cut off"))
def test_any_reply_format_error_is_handled_as_rejected_reply(mock_parse, caplog):
    gateway, _ = _gateway('{"results": [')

    with caplog.at_level(logging.WARNING, logger="travel_scout.search.gateway"):
        outcome = gateway.handle({})

    assert outcome.status_code == 500
    assert outcome.response.error == INTERNAL_ERROR_MESSAGE
    assert "LLM reply rejected" in caplog.text
    assert "Unexpected failure" not in caplog.text
