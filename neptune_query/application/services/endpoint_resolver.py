"""Resolves the AppSync GraphQL URL, consulting the local cache first."""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from neptune_query.domain.entities.endpoint_cache import CacheEntry, cache_key_for
from neptune_query.domain.entities.graphql_api import GraphqlApiDescriptor
from neptune_query.domain.errors import ConfigurationError, DiscoveryError
from neptune_query.domain.services.endpoint_region import region_from_url
from neptune_query.domain.value_objects.endpoint_selector import Auto, ById, ByName, EndpointSelector
from neptune_query.ports.output.endpoint_cache import EndpointCache
from neptune_query.ports.output.graphql_api_catalog import GraphqlApiCatalog

logger = logging.getLogger(__name__)


class EndpointResolver:
  """Selects one AppSync API and returns its GraphQL URL.

  Cached URLs are trusted until the cache is cleared by hand; there is no
  expiry. Ambiguous selections are errors, never guesses.
  """

  def __init__(self, catalog: GraphqlApiCatalog, cache: EndpointCache):
    self._catalog = catalog
    self._cache = cache

  def resolve(self, selector: EndpointSelector, region: Optional[str], profile: Optional[str] = None) -> str:
    if not region:
      raise ConfigurationError('AWS region is required to discover the AppSync endpoint')

    cache_key = cache_key_for(profile, region)
    cached = self._cache.lookup(cache_key)
    if cached:
      logger.debug('Using cached AppSync endpoint for %s', cache_key)
      return cached
    logger.debug('No cached AppSync endpoint for %s, discovering', cache_key)

    selected = self._select(selector)
    url = self._graphql_url(selected)
    logger.info('Discovered AppSync API %s (%s)', selected.name or '?', selected.api_id)

    entry = CacheEntry(
      url=url,
      region=region,
      profile=profile or '',
      api_name=selected.name,
      api_id=selected.api_id,
    )
    try:
      self._cache.write(cache_key, entry)
    except OSError as exc:
      logger.warning('Could not cache AppSync endpoint: %s', exc)

    return url

  def _select(self, selector: EndpointSelector) -> GraphqlApiDescriptor:
    if isinstance(selector, ById):
      return self._fetch_by_id(selector.api_id)
    if isinstance(selector, ByName):
      return self._fetch_by_name(selector.name)
    if isinstance(selector, Auto):
      return self._fetch_single()
    raise TypeError(f'unsupported endpoint selector: {selector!r}')

  def _fetch_by_id(self, api_id: str) -> GraphqlApiDescriptor:
    api = self._catalog.get_api(api_id)
    if api is None:
      raise DiscoveryError(f'AppSync API {api_id!r} not found')
    return api

  def _fetch_by_name(self, name: str) -> GraphqlApiDescriptor:
    matches = [api for api in self._catalog.list_apis() if api.name == name]
    if not matches:
      raise DiscoveryError(f'no AppSync API named {name!r} found')
    if len(matches) > 1:
      raise DiscoveryError(
        f'multiple AppSync APIs named {name!r} found; use NEPTUNE_APPSYNC_API_ID instead'
      )
    return matches[0]

  def _fetch_single(self) -> GraphqlApiDescriptor:
    apis = self._catalog.list_apis()
    if len(apis) == 1:
      return apis[0]

    names: List[str] = [api.name for api in apis if api.name]
    if not apis:
      raise DiscoveryError('no AppSync APIs found for the current AWS account and region')
    listed = ', '.join(names) if names else f'{len(apis)} unnamed'
    raise DiscoveryError(
      f'multiple AppSync APIs found ({listed}); '
      'set NEPTUNE_APPSYNC_API_NAME or NEPTUNE_APPSYNC_API_ID'
    )

  def _graphql_url(self, api: GraphqlApiDescriptor) -> str:
    if api.graphql_url:
      return api.graphql_url
    if not api.api_id:
      raise DiscoveryError('selected AppSync API is missing an ID')

    refreshed = self._fetch_by_id(api.api_id)
    if refreshed.graphql_url:
      return refreshed.graphql_url
    raise DiscoveryError(f'AppSync API {api.api_id!r} is missing a GraphQL URL')


class EndpointLocator:
  """The endpoint one query service talks to, resolved at most once.

  An explicitly configured URL skips discovery. The signing region is the
  configured one, or the one embedded in the AppSync hostname.
  """

  def __init__(
    self,
    resolver: Optional[EndpointResolver],
    selector: EndpointSelector,
    region: Optional[str] = None,
    profile: Optional[str] = None,
    explicit_url: Optional[str] = None,
  ):
    self._resolver = resolver
    self._selector = selector
    self._region = region
    self._profile = profile
    self._url = explicit_url or None
    self._lock = threading.Lock()

  def url(self) -> str:
    if self._url is not None:
      return self._url
    if self._resolver is None:
      raise ConfigurationError('NEPTUNE_URL is not set and endpoint discovery is unavailable')
    # Shared by concurrent requests in the HTTP server.
    with self._lock:
      if self._url is None:
        self._url = self._resolver.resolve(self._selector, self._region, self._profile)
    return self._url

  def region(self) -> str:
    if self._region:
      return self._region
    return region_from_url(self.url())
