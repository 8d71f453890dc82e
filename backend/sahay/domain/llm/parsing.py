"""
Tagged parsing of model output.

Every structured reply goes through parse_json_payload / parse_model and comes back
as either Ok(value) or ParseError(raw, reason). Callers branch on the variant; any
fallback payload is chosen explicitly by the caller, never here.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from sahay.utils.text import strip_code_fence, truncate

__all__ = ["Ok", "ParseError", "ParseResult", "parse_json_payload", "parse_model"]

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ParseError:
    raw: str
    reason: str

    def short(self, n: int = 120) -> str:
        return truncate(self.raw, n)


ParseResult = Union[Ok[T], ParseError]


def parse_json_payload(raw: Optional[str]) -> ParseResult[Any]:
    text = strip_code_fence(raw or "")
    if not text:
        return ParseError(raw=raw or "", reason="empty response")
    try:
        return Ok(json.loads(text))
    except json.JSONDecodeError as e:
        return ParseError(raw=raw or "", reason=f"invalid JSON: {e.msg} at {e.pos}")


def parse_model(
    raw: Optional[str],
    model: Type[M],
    reshape: Optional[Callable[[Any], Any]] = None,
) -> ParseResult[M]:
    """
    Decode JSON and validate it against `model`.
    `reshape` may normalize alternate layouts (e.g. a bare list) before validation.
    """
    decoded = parse_json_payload(raw)
    if isinstance(decoded, ParseError):
        return decoded
    data = reshape(decoded.value) if reshape else decoded.value
    try:
        return Ok(model.model_validate(data))
    except ValidationError as e:
        return ParseError(raw=raw or "", reason=f"unexpected shape: {e.error_count()} error(s)")
