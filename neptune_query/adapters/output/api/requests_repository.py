"""Requests-based transport for the GraphQL endpoint."""
from __future__ import annotations

from typing import Optional

import requests

from neptune_query.domain.errors import TransportError
from neptune_query.ports.output.graphql_repository import GraphqlRepository, HttpResponse
from neptune_query.ports.output.request_signer import HttpRequest


class RequestsGraphqlRepository(GraphqlRepository):
  """Performs HTTP calls using the requests library."""

  def __init__(self, session: Optional[requests.Session] = None):
    self._session = session or requests.Session()

  def send(self, request: HttpRequest, timeout: float) -> HttpResponse:
    # Pass bytes as ``data`` so requests sends the signed body untouched.
    try:
      response = self._session.request(
        request.method,
        request.url,
        data=request.body,
        headers=request.headers,
        timeout=timeout,
      )
    except requests.Timeout as e:
      raise TransportError(f'request to {request.url} timed out after {timeout:g}s') from e
    except requests.RequestException as e:
      raise TransportError(f'failed to execute request: {str(e)}') from e

    return HttpResponse(status_code=response.status_code, text=response.text)
