"""Builds, signs and sends the Neptune GraphQL mutation."""
from __future__ import annotations

import logging

from neptune_query.application.services.endpoint_resolver import EndpointLocator
from neptune_query.domain.errors import TransportError
from neptune_query.domain.value_objects.credentials import AuthType
from neptune_query.domain.value_objects.query_request import QueryRequest
from neptune_query.ports.output.credential_provider import CredentialProvider
from neptune_query.ports.output.graphql_repository import GraphqlRepository
from neptune_query.ports.output.request_signer import HttpRequest, RequestSigner

logger = logging.getLogger(__name__)

APPSYNC_SERVICE_NAME = 'appsync'
DEFAULT_TIMEOUT = 30.0


class QueryExecutor:
  """Sends one query and returns the untouched response body.

  The envelope is serialized exactly once: the same bytes are hashed for the
  signature and written to the wire, and signing happens right before
  sending.
  """

  def __init__(
    self,
    endpoint: EndpointLocator,
    credential_provider: CredentialProvider,
    signer: RequestSigner,
    repository: GraphqlRepository,
    timeout: float = DEFAULT_TIMEOUT,
    service_name: str = APPSYNC_SERVICE_NAME,
  ):
    self._endpoint = endpoint
    self._credential_provider = credential_provider
    self._signer = signer
    self._repository = repository
    self._timeout = timeout
    self._service_name = service_name

  def execute(self, query_text: str, query_type: str) -> str:
    request = QueryRequest(content=query_text, query_type=query_type)
    body = request.to_body()

    url = self._endpoint.url()
    credentials = self._credential_provider.retrieve()
    region = self._endpoint.region() if credentials.auth_type == AuthType.SIGV4 else ''

    unsigned = HttpRequest(
      method='POST',
      url=url,
      body=body,
      headers={'Content-Type': 'application/json'},
    )
    signed = self._signer.sign(unsigned, credentials, self._service_name, region)

    logger.debug('POST %s (%s query, %d bytes)', url, query_type, len(body))
    response = self._repository.send(signed, timeout=self._timeout)
    if response.status_code != 200:
      logger.warning('GraphQL endpoint returned status %d', response.status_code)
      raise TransportError(
        f'API returned status code {response.status_code}',
        status_code=response.status_code,
        raw_response=response.text,
      )
    return response.text
