"""Application handler that turns query failures into results."""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand
from neptune_query.application.queries.query_result import QueryResult, QueryStatus
from neptune_query.domain.errors import NeptuneQueryError

if TYPE_CHECKING:
  from neptune_query.ports.input.query_service import QueryService

logger = logging.getLogger(__name__)


class ExecuteQueryHandler:
  """Coordinates a query for adapters that report errors instead of raising."""

  def __init__(self, query_service: 'QueryService'):
    self._query_service = query_service

  def handle(self, command: ExecuteQueryCommand) -> QueryResult:
    start = time.perf_counter()
    query_type = command.query_type.value
    try:
      if command.query is not None:
        processed, raw_response = self._query_service.execute_query(command.query, query_type)
      else:
        processed, raw_response = self._query_service.execute(command.query_file, query_type)
    except NeptuneQueryError as exc:
      logger.debug('Query failed: %s', exc)
      raw_response = exc.raw_response or ''
      return QueryResult(
        status=QueryStatus.ERROR,
        query_type=query_type,
        processed=raw_response,
        raw_response=raw_response,
        execution_time=time.perf_counter() - start,
        error=str(exc),
      )

    return QueryResult(
      status=QueryStatus.SUCCESS,
      query_type=query_type,
      processed=processed,
      raw_response=raw_response,
      execution_time=time.perf_counter() - start,
    )
