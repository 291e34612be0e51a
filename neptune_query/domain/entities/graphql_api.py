"""Domain entities for AppSync GraphQL API discovery."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

GRAPHQL_PROTOCOL = 'GRAPHQL'


@dataclass(frozen=True)
class GraphqlApiDescriptor:
  """An AppSync API as listed by the control plane."""

  api_id: Optional[str]
  name: Optional[str] = None
  uris: Dict[str, str] = field(default_factory=dict)

  @property
  def graphql_url(self) -> Optional[str]:
    return self.uris.get(GRAPHQL_PROTOCOL) or None

  @staticmethod
  def from_api(api: Mapping[str, Any]) -> 'GraphqlApiDescriptor':
    """Build a descriptor from an AppSync ``GraphqlApi`` dictionary."""
    return GraphqlApiDescriptor(
      api_id=api.get('apiId'),
      name=api.get('name'),
      uris=dict(api.get('uris') or {}),
    )
