"""External text collaborators and their fallbacks."""

from .base import (
    BILL_MESSAGE_TEMPLATE,
    InsightSummarizer,
    MessageGenerator,
    NullAssistant,
    RouteSuggester,
    business_insight,
    fallback_bill_message,
    generate_bill_message,
    suggest_route_order,
)
from .gemini_client import GeminiClient
from .requests import MessageDesk, MessageResult, request_insight, request_route_order

__all__ = [
    "BILL_MESSAGE_TEMPLATE",
    "GeminiClient",
    "InsightSummarizer",
    "MessageDesk",
    "MessageGenerator",
    "MessageResult",
    "NullAssistant",
    "RouteSuggester",
    "business_insight",
    "fallback_bill_message",
    "generate_bill_message",
    "request_insight",
    "request_route_order",
    "suggest_route_order",
]
