# backend/tests/conftest.py
from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(THIS_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest


class FakeGateway:
    """Stands in for LLMGateway: replays queued replies (or raises queued errors) and records calls."""

    def __init__(self, *replies: Any, configured: bool = True) -> None:
        self.replies: List[Any] = list(replies)
        self.calls: List[Dict[str, Any]] = []
        self.configured = configured

    def complete(self, messages, system: Optional[str] = None, temperature: Optional[float] = None) -> str:
        self.calls.append({"messages": list(messages), "system": system})
        nxt = self.replies.pop(0) if self.replies else ""
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


@pytest.fixture
def fake_gateway():
    return FakeGateway()
