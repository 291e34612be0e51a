"""Plain text presenter for the terminal."""
from __future__ import annotations

from neptune_query.application.queries.query_result import QueryResult, QueryStatus
from neptune_query.ports.input.result_presenter import ResultPresenter


class TextPresenter(ResultPresenter):
  def present(self, result: QueryResult) -> str:
    if result.status == QueryStatus.ERROR:
      return f'Error: {result.error or "query failed"}'
    return result.processed

  def present_error(self, error: Exception) -> str:
    return f'Error: {error}'
