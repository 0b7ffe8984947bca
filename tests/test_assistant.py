import asyncio
import json
from datetime import date

import httpx
import pytest

from milkround.config import settings
from milkround.errors import ExternalServiceError
from milkround.models.domain import BillingMonth, Customer
from milkround.services.assistant import (
    GeminiClient,
    MessageDesk,
    NullAssistant,
    business_insight,
    generate_bill_message,
    suggest_route_order,
)
from milkround.services.customers.registry import CustomerRegistry
from milkround.services.routing.sequencer import RouteSequencer


def _customer(cid: str, name: str) -> Customer:
    return Customer(
        id=cid,
        name=name,
        address=f"{name} Lane",
        mobile="9876543210",
        default_quantity=1.0,
        price_per_litre=60.0,
    )


class FailingAssistant:
    def generate_message(self, customer, total_due, due_date, month):
        raise ExternalServiceError("down")

    def suggest_order(self, customers):
        raise TimeoutError("slow")

    def summarize(self, total_quantity, total_revenue, customer_count):
        raise ExternalServiceError("down")


class EchoAssistant:
    def __init__(self, names=None):
        self.names = names

    def generate_message(self, customer, total_due, due_date, month):
        return f"  Dear {customer.name}: {total_due} for {month}  "

    def suggest_order(self, customers):
        return self.names

    def summarize(self, total_quantity, total_revenue, customer_count):
        return ""


def test_bill_message_falls_back_to_template():
    customer = _customer("c1", "Sharma Ji")

    message = generate_bill_message(FailingAssistant(), customer, 450.0, date(2024, 4, 5), "2024-03")

    assert message == "Hello Sharma Ji, your bill for 2024-03 is 450. Please pay by 2024-04-05. Thanks!"


def test_bill_message_template_keeps_fractional_amounts():
    customer = _customer("c1", "Anjali")
    message = generate_bill_message(NullAssistant(), customer, 92.5, date(2024, 4, 5), BillingMonth(2024, 3))
    assert "is 92.50." in message


def test_bill_message_uses_collaborator_text():
    message = generate_bill_message(EchoAssistant(), _customer("c1", "Anjali"), 10.0, date(2024, 4, 5), "2024-03")
    assert message == "Dear Anjali: 10.0 for 2024-03"


def test_route_suggestion_failure_keeps_current_order():
    registry = CustomerRegistry()
    for name in ("A", "B", "C"):
        registry.add(name=name, address="X", mobile="1", default_quantity=1.0, price_per_litre=60.0)
    sequencer = RouteSequencer(registry)
    before = sequencer.visible_order()

    names = suggest_route_order(FailingAssistant(), sequencer.snapshot())
    sequencer.apply_suggested_order(names)

    assert names == ["A", "B", "C"]
    assert sequencer.visible_order() == before


@pytest.mark.parametrize("payload", [None, "A,B", [1, 2]])
def test_route_suggestion_rejects_unusable_payload(payload):
    customers = [_customer("c1", "A"), _customer("c2", "B")]
    assert suggest_route_order(EchoAssistant(payload), customers) == ["A", "B"]


def test_insight_placeholder_on_failure_or_empty_text():
    assert business_insight(FailingAssistant(), 10, 600, 4) == settings.insight_placeholder
    assert business_insight(EchoAssistant(), 10, 600, 4) == settings.insight_placeholder


def test_message_desk_discards_superseded_reply():
    desk = MessageDesk(EchoAssistant())
    first = desk.issue("c1")
    second = desk.issue("c1")

    newest = desk.settle("c1", second, "second")
    stale = desk.settle("c1", first, "first")

    assert newest.superseded is False
    assert stale.superseded is True
    assert desk.latest("c1").text == "second"


def test_message_desk_request_runs_generator():
    desk = MessageDesk(FailingAssistant())
    customer = _customer("c1", "Mrs. Iyer")

    result = asyncio.run(desk.request(customer, 300.0, date(2024, 4, 5), BillingMonth(2024, 3)))

    assert result.superseded is False
    assert result.text.startswith("Hello Mrs. Iyer")
    assert desk.latest("c1") is result


def _gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_gemini_client_parses_route_suggestion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_reply('["B", "A"]'))

    client = GeminiClient(api_key="test-key", model="test-model", transport=httpx.MockTransport(handler))

    names = client.suggest_order([_customer("c1", "A"), _customer("c2", "B")])

    assert names == ["B", "A"]
    assert seen["url"].endswith("/models/test-model:generateContent")
    assert seen["key"] == "test-key"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"


def test_gemini_client_retries_server_errors_then_fails():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    client = GeminiClient(
        api_key="k", max_retries=2, backoff_seconds=0, transport=httpx.MockTransport(handler)
    )

    with pytest.raises(ExternalServiceError):
        client.summarize(10, 600, 4)
    assert len(calls) == 3


def test_gemini_client_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, json={"error": "bad"})

    client = GeminiClient(api_key="k", max_retries=3, backoff_seconds=0, transport=httpx.MockTransport(handler))

    with pytest.raises(ExternalServiceError):
        client.generate_message(_customer("c1", "A"), 10.0, date(2024, 4, 5), BillingMonth(2024, 3))
    assert len(calls) == 1


def test_gemini_client_rejects_non_json_route():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=_gemini_reply("A then B")))
    client = GeminiClient(api_key="k", transport=transport)

    with pytest.raises(ExternalServiceError):
        client.suggest_order([_customer("c1", "A")])


def test_gemini_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
    with pytest.raises(ValueError):
        GeminiClient()
