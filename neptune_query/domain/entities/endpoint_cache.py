"""Entities persisted by the endpoint discovery cache."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

CACHE_VERSION = 1
DEFAULT_PROFILE = 'default'
UNKNOWN_REGION = 'unknown'


def cache_key_for(profile: Optional[str], region: Optional[str]) -> str:
  """Key entries by profile and region.

  Unset values fall back to fixed placeholders, so two unconfigured
  environments share one entry.
  """
  return f'{profile or DEFAULT_PROFILE}|{region or UNKNOWN_REGION}'


@dataclass
class CacheEntry:
  url: str
  region: str = ''
  profile: str = ''
  api_name: Optional[str] = None
  api_id: Optional[str] = None
  fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

  def to_dict(self) -> Dict[str, Any]:
    payload: Dict[str, Any] = {'url': self.url}
    if self.api_name:
      payload['api_name'] = self.api_name
    if self.api_id:
      payload['api_id'] = self.api_id
    if self.region:
      payload['region'] = self.region
    if self.profile:
      payload['profile'] = self.profile
    payload['fetched_at'] = self.fetched_at.isoformat()
    return payload

  @staticmethod
  def from_dict(data: Mapping[str, Any]) -> 'CacheEntry':
    fetched_at = data.get('fetched_at')
    try:
      parsed = datetime.fromisoformat(fetched_at) if isinstance(fetched_at, str) else None
    except ValueError:
      parsed = None

    return CacheEntry(
      url=str(data.get('url') or ''),
      region=str(data.get('region') or ''),
      profile=str(data.get('profile') or ''),
      api_name=data.get('api_name'),
      api_id=data.get('api_id'),
      fetched_at=parsed or datetime.fromtimestamp(0, tz=timezone.utc),
    )


@dataclass
class CacheFile:
  version: int = CACHE_VERSION
  entries: Dict[str, CacheEntry] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    return {
      'version': self.version,
      'entries': {key: entry.to_dict() for key, entry in self.entries.items()},
    }

  @staticmethod
  def from_dict(data: Mapping[str, Any]) -> 'CacheFile':
    """Parse a cache document; raises ``ValueError`` on a foreign schema."""
    if data.get('version') != CACHE_VERSION:
      raise ValueError(f'unsupported cache version: {data.get("version")!r}')
    entries = data.get('entries') or {}
    if not isinstance(entries, dict):
      raise ValueError('cache entries must be an object')
    return CacheFile(
      version=CACHE_VERSION,
      entries={
        key: CacheEntry.from_dict(value)
        for key, value in entries.items()
        if isinstance(value, dict)
      },
    )
