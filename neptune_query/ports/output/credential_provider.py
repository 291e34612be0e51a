"""Output port supplying request credentials."""
from __future__ import annotations

from typing import Protocol

from neptune_query.domain.value_objects.credentials import Credentials


class CredentialProvider(Protocol):
  def retrieve(self) -> Credentials:
    """Return signing material or a bearer token.

    Raises:
      SigningError: If no usable credentials are available
    """
    ...
