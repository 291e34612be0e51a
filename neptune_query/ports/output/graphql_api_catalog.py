"""Output port for the GraphQL API control plane."""
from __future__ import annotations

from typing import List, Optional, Protocol

from neptune_query.domain.entities.graphql_api import GraphqlApiDescriptor


class GraphqlApiCatalog(Protocol):
  def get_api(self, api_id: str) -> Optional[GraphqlApiDescriptor]:
    """Fetch a single API by ID; ``None`` when it does not exist.

    Raises:
      DiscoveryError: If the control plane call fails
    """
    ...

  def list_apis(self) -> List[GraphqlApiDescriptor]:
    """Return every API in the account and region, all pages drained.

    Raises:
      DiscoveryError: If any page cannot be fetched
    """
    ...
