"""Shared request dependencies."""

from __future__ import annotations

from fastapi import Request

from ..store import MilkRoundStore


def get_store(request: Request) -> MilkRoundStore:
    return request.app.state.store
