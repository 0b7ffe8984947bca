"""HTTP client for the Gemini text generation API."""

from __future__ import annotations

import json
import logging
import time
from datetime import date
from typing import Any, Sequence

import httpx

from ...config import settings
from ...errors import ExternalServiceError
from ...models.domain import BillingMonth, Customer

logger = logging.getLogger(__name__)

_ROUTE_SCHEMA = {"type": "ARRAY", "items": {"type": "STRING"}}


class GeminiClient:
    """Implements the message, route and insight collaborators over one endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.gemini_api_key
        if not self.api_key:
            raise ValueError("Gemini API key is not configured.")
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.model = model or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.gemini_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.gemini_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.gemini_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        # A fresh client per call; requests may run on worker threads.
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def _generate(self, prompt: str, response_schema: dict | None = None) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }
        headers = {"x-goog-api-key": self.api_key}

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.post(url, json=body, headers=headers)
                    response.raise_for_status()
                    return _extract_text(response.json())
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    if status_code < 500 and status_code != 429:
                        raise ExternalServiceError(f"Gemini rejected the request ({status_code}).") from e
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ExternalServiceError(
                            f"Gemini request failed after {self.max_retries} retries ({status_code})."
                        ) from e
                    time.sleep(self.backoff_seconds * attempt)
                except httpx.HTTPError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ExternalServiceError(f"Failed to reach Gemini at {self.base_url}: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(
                        f"Gemini network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}"
                    )
                    time.sleep(wait_time)
        finally:
            client.close()

    def generate_message(
        self, customer: Customer, total_due: float, due_date: date, month: BillingMonth
    ) -> str:
        prompt = (
            "Write a polite, short, and professional WhatsApp message from a Milk Delivery Service "
            f"to a customer named {customer.name}.\n\n"
            "Details:\n"
            f"- Month: {month}\n"
            f"- Total Bill Amount: {total_due}\n"
            f"- Due Date: {due_date.isoformat()}\n"
            "- Payment Method: UPI or Cash\n\n"
            "The tone should be friendly but professional. Include a placeholder for the UPI ID.\n"
            "Do not include a subject line."
        )
        return self._generate(prompt)

    def suggest_order(self, customers: Sequence[Customer]) -> list[str]:
        addresses = "\n".join(f"{customer.name}: {customer.address}" for customer in customers)
        prompt = (
            "I am a milkman with a list of delivery addresses. Please reorder this list to suggest a "
            "logical, efficient route sequence to minimize travel time.\n\n"
            "Assume a standard city layout. Group nearby addresses.\n\n"
            f"Addresses:\n{addresses}\n\n"
            "Return ONLY a JSON array of strings with the customer names in the optimized order."
        )
        text = self._generate(prompt, response_schema=_ROUTE_SCHEMA)
        try:
            names = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ExternalServiceError("Gemini returned a route that is not valid JSON.") from exc
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise ExternalServiceError("Gemini returned a route that is not a list of names.")
        return names

    def summarize(self, total_quantity: float, total_revenue: float, customer_count: int) -> str:
        prompt = (
            "As a business analyst for a local milk delivery business, provide 3 short, bulleted "
            "strategic tips to improve profitability based on today's stats:\n"
            f"- Daily Milk Delivered: {total_quantity} Liters\n"
            f"- Est. Daily Revenue: {total_revenue}\n"
            f"- Active Customers: {customer_count}\n\n"
            "Keep it very concise (max 50 words per bullet)."
        )
        return self._generate(prompt)


def _extract_text(payload: Any) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ExternalServiceError("Gemini response has no candidates.") from exc
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise ExternalServiceError("Gemini response is empty.")
    return text


def check_health(client: GeminiClient | None = None) -> bool:
    try:
        client = client or GeminiClient()
        client._generate("Reply with OK.")
        return True
    except (ValueError, ExternalServiceError):
        return False
