"""Markdown presenter for the web UI."""
from __future__ import annotations

from neptune_query.application.queries.query_result import QueryResult, QueryStatus
from neptune_query.ports.input.result_presenter import ResultPresenter


def _fence(text: str, language: str = '') -> str:
  return f'```{language}\n{text}\n```'


class MarkdownPresenter(ResultPresenter):
  def present(self, result: QueryResult) -> str:
    lines = [
      f'**Type:** `{result.query_type}`',
      f'**Execution time:** {result.execution_time:.2f}s',
      '',
    ]
    if result.status == QueryStatus.ERROR:
      lines.extend([f'**Error:** {result.error}', ''])
      if result.raw_response:
        lines.append(_fence(result.raw_response))
      return '\n'.join(lines)

    lines.append(_fence(result.processed, 'json'))
    return '\n'.join(lines)

  def present_error(self, error: Exception) -> str:
    return f'**Error:** {error}'
