"""Infers the AWS region from an AppSync endpoint URL."""
from __future__ import annotations

from urllib.parse import urlparse

from neptune_query.domain.errors import ConfigurationError


def region_from_url(endpoint: str) -> str:
  """Return ``us-east-2`` for ``https://x.appsync-api.us-east-2.amazonaws.com/graphql``."""
  if not endpoint:
    raise ConfigurationError('appsync endpoint is required')
  try:
    host = urlparse(endpoint).hostname
  except ValueError as exc:
    raise ConfigurationError(f'invalid appsync endpoint {endpoint!r}: {exc}') from exc
  if not host:
    raise ConfigurationError(f'appsync endpoint {endpoint!r} missing hostname')

  parts = host.split('.')
  for index, part in enumerate(parts):
    if part == 'appsync-api' and index + 1 < len(parts):
      return parts[index + 1]
  raise ConfigurationError(f'unable to infer AWS region from appsync endpoint {endpoint!r}')
