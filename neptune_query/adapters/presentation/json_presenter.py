"""JSON presenter implementation."""
from __future__ import annotations

from typing import Any, Dict

from neptune_query.application.queries.query_result import QueryResult
from neptune_query.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  """Shapes results as the HTTP response document."""

  def present(self, result: QueryResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
      'type': result.query_type,
      'processed': result.processed,
      'rawResponse': result.raw_response,
    }
    if result.error:
      payload['error'] = result.error
    return payload

  def present_error(self, error: Exception) -> Dict[str, Any]:
    return {'error': str(error)}
