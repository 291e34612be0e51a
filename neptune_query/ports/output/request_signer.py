"""Output port for authenticating outgoing GraphQL requests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol

from neptune_query.domain.value_objects.credentials import Credentials


@dataclass(frozen=True)
class HttpRequest:
  """Request skeleton; ``body`` is the exact byte sequence to sign and send."""
  method: str
  url: str
  body: bytes
  headers: Dict[str, str] = field(default_factory=dict)


class RequestSigner(Protocol):
  def sign(
    self,
    request: HttpRequest,
    credentials: Credentials,
    service_name: str,
    region: str,
  ) -> HttpRequest:
    """Return a copy of ``request`` carrying authentication headers.

    Raises:
      SigningError: If the signature cannot be computed
    """
    ...
