"""Output port for reading stored secrets."""
from __future__ import annotations

from typing import Optional, Protocol


class SecretsRepository(Protocol):
  def get_secret_string(self, secret_name: str) -> Optional[str]:
    """Return the secret's string payload, or ``None`` if it has none.

    Raises:
      LoginError: If the secret cannot be fetched
    """
    ...
