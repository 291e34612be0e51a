"""Implementation of the query service port."""
from __future__ import annotations

import sys
from typing import IO, Optional, Tuple

from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand
from neptune_query.application.handlers.query_handler import ExecuteQueryHandler
from neptune_query.application.queries.query_result import QueryResult
from neptune_query.application.services.query_executor import QueryExecutor
from neptune_query.domain.errors import QueryValidationError
from neptune_query.domain.services.response_unwrapper import ResponseUnwrapper
from neptune_query.ports.input.query_service import QueryService


class QueryServiceImpl(QueryService):
  """Runs a query through the executor and unwraps the response."""

  def __init__(
    self,
    executor: QueryExecutor,
    unwrapper: Optional[ResponseUnwrapper] = None,
    stdin: Optional[IO[str]] = None,
  ) -> None:
    self._executor = executor
    self._unwrapper = unwrapper or ResponseUnwrapper()
    self._stdin = stdin
    self._handler = ExecuteQueryHandler(self)

  def execute(self, query_file: Optional[str], query_type: str) -> Tuple[str, str]:
    query = self._read_query_content(query_file)
    return self.execute_query(query, query_type)

  def execute_query(self, query: str, query_type: str) -> Tuple[str, str]:
    if not query or not query.strip():
      raise QueryValidationError('query content is empty')

    raw_response = self._executor.execute(query, query_type)
    result = self._unwrapper.unwrap(raw_response)
    if result.error is not None:
      raise result.error
    return result.text, raw_response

  def run(self, command: ExecuteQueryCommand) -> QueryResult:
    return self._handler.handle(command)

  def _read_query_content(self, query_file: Optional[str]) -> str:
    if query_file:
      try:
        with open(query_file, 'r', encoding='utf-8') as handle:
          return handle.read()
      except OSError as exc:
        raise QueryValidationError(f'failed to open query file: {exc}') from exc

    stream = self._stdin if self._stdin is not None else sys.stdin
    if stream is None or stream.isatty():
      raise QueryValidationError(
        "no query provided. Use 'echo \"query\" | nq query' or 'nq query <query_file>'"
      )
    try:
      return stream.read()
    except OSError as exc:
      raise QueryValidationError(f'failed to read query content: {exc}') from exc
