"""boto3-backed catalog of AppSync GraphQL APIs."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from neptune_query.domain.entities.graphql_api import GraphqlApiDescriptor
from neptune_query.domain.errors import DiscoveryError
from neptune_query.ports.output.graphql_api_catalog import GraphqlApiCatalog

logger = logging.getLogger(__name__)


class Boto3GraphqlApiCatalog(GraphqlApiCatalog):
  """Reads API metadata through an ``appsync`` boto3 client."""

  def __init__(self, client: Any):
    self._client = client

  @classmethod
  def from_session(cls, session: Any, region: Optional[str] = None) -> 'Boto3GraphqlApiCatalog':
    return cls(session.client('appsync', region_name=region))

  def get_api(self, api_id: str) -> Optional[GraphqlApiDescriptor]:
    try:
      response = self._client.get_graphql_api(apiId=api_id)
    except ClientError as exc:
      if exc.response.get('Error', {}).get('Code') == 'NotFoundException':
        return None
      raise DiscoveryError(f'get AppSync API {api_id!r}: {exc}') from exc
    except BotoCoreError as exc:
      raise DiscoveryError(f'get AppSync API {api_id!r}: {exc}') from exc

    api = response.get('graphqlApi')
    if not api:
      return None
    return GraphqlApiDescriptor.from_api(api)

  def list_apis(self) -> List[GraphqlApiDescriptor]:
    apis: List[GraphqlApiDescriptor] = []
    try:
      paginator = self._client.get_paginator('list_graphql_apis')
      for page in paginator.paginate():
        apis.extend(GraphqlApiDescriptor.from_api(api) for api in page.get('graphqlApis', []))
    except (BotoCoreError, ClientError) as exc:
      raise DiscoveryError(f'list AppSync APIs: {exc}') from exc

    logger.debug('Listed %d AppSync APIs', len(apis))
    return apis
