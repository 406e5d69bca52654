"""Strict JSON decoding for Azure OpenAI payloads.

`json.loads` accepts `NaN`, `Infinity` and float literals that overflow to
infinity (`1e400`). None of these can be rendered back into a JSON response, so
they are rejected at decode time.
"""

from __future__ import annotations

import json
import math
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"JSON number out of range: {literal}")
    return value


def loads_strict(text: str | bytes) -> Any:
    """Decode JSON, raising ValueError for non-finite numbers."""

    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
