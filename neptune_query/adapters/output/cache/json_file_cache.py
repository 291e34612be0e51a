"""JSON file implementation of the endpoint discovery cache."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from neptune_query.domain.entities.endpoint_cache import CacheEntry, CacheFile
from neptune_query.ports.output.endpoint_cache import EndpointCache

logger = logging.getLogger(__name__)


class JsonFileEndpointCache(EndpointCache):
  """Whole-file cache: every write re-reads, merges and atomically replaces.

  Concurrent writers race and the last one wins.
  """

  def __init__(self, path: Union[str, Path]):
    self._path = Path(path)

  @property
  def path(self) -> Path:
    return self._path

  def read(self) -> CacheFile:
    try:
      with self._path.open('r', encoding='utf-8') as handle:
        payload = json.load(handle)
      return CacheFile.from_dict(payload)
    except FileNotFoundError:
      return CacheFile()
    except (OSError, ValueError, AttributeError) as exc:
      logger.debug('Ignoring unreadable endpoint cache %s: %s', self._path, exc)
      return CacheFile()

  def lookup(self, key: str) -> Optional[str]:
    entry = self.read().entries.get(key)
    if entry is None or not entry.url:
      return None
    return entry.url

  def write(self, key: str, entry: CacheEntry) -> None:
    if not entry.url:
      return

    cache = self.read()
    cache.entries[key] = entry
    payload = json.dumps(cache.to_dict(), indent=2)

    directory = self._path.parent
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
      'w',
      delete=False,
      dir=directory,
      prefix='appsync-cache-',
      suffix='.json',
      encoding='utf-8',
    ) as tmp:
      tmp_path = Path(tmp.name)
      try:
        tmp.write(payload + '\n')
        tmp.flush()
        os.fsync(tmp.fileno())
      except OSError:
        tmp.close()
        tmp_path.unlink(missing_ok=True)
        raise
    try:
      os.replace(tmp_path, self._path)
    except OSError:
      tmp_path.unlink(missing_ok=True)
      raise

  def clear(self) -> bool:
    """Delete the cache file; returns whether one existed."""
    try:
      self._path.unlink()
    except FileNotFoundError:
      return False
    return True
