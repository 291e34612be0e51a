"""Input port defining the query service contract."""
from __future__ import annotations

from typing import Optional, Protocol, Tuple

from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand
from neptune_query.application.queries.query_result import QueryResult


class QueryService(Protocol):
  def execute(self, query_file: Optional[str], query_type: str) -> Tuple[str, str]:
    """Read the query from a file (or piped stdin) and run it.

    Returns:
      ``(processed, raw_response)``
    """
    ...

  def execute_query(self, query: str, query_type: str) -> Tuple[str, str]:
    """Run inline query text and return ``(processed, raw_response)``."""
    ...

  def run(self, command: ExecuteQueryCommand) -> QueryResult:
    """Run a command and report failures inside the result instead of raising."""
    ...
