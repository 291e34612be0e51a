"""Output port for the HTTP transport used to reach the GraphQL endpoint."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from neptune_query.ports.output.request_signer import HttpRequest


@dataclass(frozen=True)
class HttpResponse:
  status_code: int
  text: str


class GraphqlRepository(Protocol):
  def send(self, request: HttpRequest, timeout: float) -> HttpResponse:
    """Send the request as-is and return the status and body text.

    Raises:
      TransportError: On connection failures or timeouts
    """
    ...
