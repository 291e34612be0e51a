"""Peels the nested JSON layers returned by the Neptune GraphQL resolver.

The backend answers with a GraphQL envelope whose ``data.executeQuery`` field
is itself a JSON document serialized to a string, which may in turn wrap the
result in a ``data`` key. Each layer is a step that either hands a value to
the next step or stops with the text that should be displayed.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from neptune_query.domain.errors import ResponseShapeError


@dataclass(frozen=True)
class Continue:
  value: Any


@dataclass(frozen=True)
class Stop:
  text: str


StepResult = Union[Continue, Stop]


@dataclass(frozen=True)
class _Layer:
  """Value carried between steps, with the text to fall back on."""
  value: Any
  fallback: str


@dataclass(frozen=True)
class UnwrapResult:
  text: str
  error: Optional[ResponseShapeError] = None

  @property
  def ok(self) -> bool:
    return self.error is None


def _envelope_data(layer: _Layer) -> StepResult:
  data = layer.value.get('data') if isinstance(layer.value, dict) else None
  if not isinstance(data, dict):
    return Stop(layer.fallback)
  return Continue(_Layer(data, layer.fallback))


def _execute_query_string(layer: _Layer) -> StepResult:
  inner = layer.value.get('executeQuery')
  if not isinstance(inner, str):
    return Stop(layer.fallback)
  return Continue(_Layer(inner, inner))


def _inner_json(layer: _Layer) -> StepResult:
  try:
    return Continue(_Layer(json.loads(layer.value), layer.fallback))
  except ValueError:
    return Stop(layer.value)


def _nested_data(layer: _Layer) -> StepResult:
  if isinstance(layer.value, dict) and 'data' in layer.value:
    return Continue(_Layer(layer.value['data'], layer.fallback))
  return Continue(layer)


def _pretty_print(layer: _Layer) -> StepResult:
  try:
    return Stop(json.dumps(layer.value, indent=2, ensure_ascii=False))
  except (TypeError, ValueError):
    return Stop(layer.fallback)


STEPS: Tuple[Callable[[_Layer], StepResult], ...] = (
  _envelope_data,
  _execute_query_string,
  _inner_json,
  _nested_data,
  _pretty_print,
)


class ResponseUnwrapper:
  """Turns a raw response body into display text, degrading layer by layer.

  The default chain always ends in pretty-printing, which stops. A custom
  ``steps`` chain that runs out without stopping yields the text of the last
  layer it reached.
  """

  def __init__(self, steps: Optional[List[Callable[[_Layer], StepResult]]] = None):
    self._steps = tuple(steps) if steps is not None else STEPS

  def unwrap(self, raw_body: str) -> UnwrapResult:
    try:
      envelope = json.loads(raw_body)
    except ValueError as exc:
      return self._failure(raw_body, str(exc))
    if not isinstance(envelope, dict):
      return self._failure(raw_body, f'expected a JSON object, got {type(envelope).__name__}')

    current: StepResult = Continue(_Layer(envelope, raw_body))
    for step in self._steps:
      current = step(current.value)
      if isinstance(current, Stop):
        return UnwrapResult(text=current.text)
    return UnwrapResult(text=current.value.fallback)

  @staticmethod
  def _failure(raw_body: str, reason: str) -> UnwrapResult:
    return UnwrapResult(
      text=raw_body,
      error=ResponseShapeError(f'failed to unmarshal JSON response: {reason}', raw_response=raw_body),
    )
