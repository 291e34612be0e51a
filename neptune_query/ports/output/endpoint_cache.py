"""Output port for the endpoint discovery cache."""
from __future__ import annotations

from typing import Optional, Protocol

from neptune_query.domain.entities.endpoint_cache import CacheEntry, CacheFile


class EndpointCache(Protocol):
  """Local key to entry store of previously discovered endpoint URLs."""

  def read(self) -> CacheFile:
    """Return the whole cache; never raises, a broken store reads as empty."""
    ...

  def lookup(self, key: str) -> Optional[str]:
    """Return the cached URL for ``key`` or ``None`` on a miss."""
    ...

  def write(self, key: str, entry: CacheEntry) -> None:
    """Merge ``entry`` into the stored cache and persist it.

    Raises:
      OSError: If the cache could not be persisted
    """
    ...
