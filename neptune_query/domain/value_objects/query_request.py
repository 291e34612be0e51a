"""Value object for a query submitted to the Neptune GraphQL endpoint."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from neptune_query.domain.errors import QueryValidationError

EXECUTE_QUERY_MUTATION = 'mutation ($input: NeptuneQuery!) { executeQuery(input: $input) }'


@dataclass(frozen=True)
class QueryRequest:
  """Query text plus the language tag forwarded to the backend.

  The tag is opaque here; callers restrict it to ``gremlin`` or ``cypher``.
  """

  content: str
  query_type: str = 'gremlin'

  def __post_init__(self) -> None:
    if not self.content or not self.content.strip():
      raise QueryValidationError('query content is empty')

  def to_envelope(self) -> Dict[str, Any]:
    return {
      'query': EXECUTE_QUERY_MUTATION,
      'variables': {
        'input': {
          'type': self.query_type,
          'query': self.content,
        },
      },
    }

  def to_body(self) -> bytes:
    """Serialize the envelope once; these bytes are both signed and sent."""
    return json.dumps(self.to_envelope()).encode('utf-8')
