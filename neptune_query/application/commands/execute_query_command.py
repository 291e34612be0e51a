"""Command object representing a query submission."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QueryType(str, Enum):
  """Query languages accepted by the Neptune resolver."""
  GREMLIN = 'gremlin'
  CYPHER = 'cypher'


@dataclass(frozen=True)
class ExecuteQueryCommand:
  """Either inline query text or a path to read it from.

  With neither set the query is read from piped standard input.
  """
  query_type: QueryType = QueryType.GREMLIN
  query: Optional[str] = None
  query_file: Optional[str] = None

  def __post_init__(self) -> None:
    if self.query is not None and self.query_file is not None:
      raise ValueError('provide either query or query_file, not both')
