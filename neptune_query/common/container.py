"""Simple dependency wiring helpers.

Every call builds a fresh object graph from the settings it is given; no
clients or credentials are shared through module state.
"""
from __future__ import annotations

import logging
from typing import IO, Optional

import boto3
from botocore.exceptions import BotoCoreError

from neptune_query.adapters.output.api.requests_repository import RequestsGraphqlRepository
from neptune_query.adapters.output.appsync.boto3_catalog import Boto3GraphqlApiCatalog
from neptune_query.adapters.output.auth.credential_providers import Boto3CredentialProvider, StaticTokenProvider
from neptune_query.adapters.output.auth.request_signer import BotocoreRequestSigner
from neptune_query.adapters.output.cache.json_file_cache import JsonFileEndpointCache
from neptune_query.adapters.output.oauth2.requests_oauth2_provider import RequestsOAuth2Provider
from neptune_query.adapters.output.secrets.boto3_secrets_repository import Boto3SecretsRepository
from neptune_query.application.handlers.login_handler import LoginHandler
from neptune_query.application.services.endpoint_resolver import EndpointLocator, EndpointResolver
from neptune_query.application.services.login_service import LoginService
from neptune_query.application.services.query_executor import QueryExecutor
from neptune_query.application.services.query_service_impl import QueryServiceImpl
from neptune_query.common.config import Settings
from neptune_query.domain.errors import ConfigurationError
from neptune_query.domain.services.response_unwrapper import ResponseUnwrapper
from neptune_query.domain.value_objects.endpoint_selector import selector_from_options

logger = logging.getLogger(__name__)


def create_aws_session(profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
  try:
    return boto3.Session(profile_name=profile or None, region_name=region or None)
  except BotoCoreError as exc:
    raise ConfigurationError(f'load AWS configuration: {exc}') from exc


def create_endpoint_cache(settings: Settings) -> JsonFileEndpointCache:
  return JsonFileEndpointCache(settings.resolved_cache_path())


def create_query_service(settings: Settings, stdin: Optional[IO[str]] = None) -> QueryServiceImpl:
  """Wire the query pipeline.

  A configured ``NEPTUNE_TOKEN`` selects bearer authentication, otherwise
  requests are SigV4-signed with the AWS session. A configured
  ``NEPTUNE_URL`` skips endpoint discovery.
  """
  needs_aws = not settings.neptune_token or not settings.neptune_url
  session = create_aws_session(settings.aws_profile, settings.aws_region) if needs_aws else None
  region = settings.aws_region or (session.region_name if session is not None else None)

  resolver = None
  if not settings.neptune_url:
    if not region:
      raise ConfigurationError('AWS region is required to discover the AppSync endpoint')
    resolver = EndpointResolver(
      catalog=Boto3GraphqlApiCatalog.from_session(session, region),
      cache=create_endpoint_cache(settings),
    )
  endpoint = EndpointLocator(
    resolver=resolver,
    selector=selector_from_options(settings.appsync_api_id, settings.appsync_api_name),
    region=region,
    profile=settings.aws_profile,
    explicit_url=settings.neptune_url,
  )

  if settings.neptune_token:
    logger.debug('Using bearer token authentication')
    credential_provider = StaticTokenProvider(settings.neptune_token)
  else:
    logger.debug('Using SigV4 authentication')
    credential_provider = Boto3CredentialProvider(session)

  executor = QueryExecutor(
    endpoint=endpoint,
    credential_provider=credential_provider,
    signer=BotocoreRequestSigner(),
    repository=RequestsGraphqlRepository(),
  )
  return QueryServiceImpl(executor, ResponseUnwrapper(), stdin=stdin)


def create_login_handler(settings: Settings, secret_name: Optional[str] = None) -> LoginHandler:
  session = create_aws_session(settings.aws_profile, settings.aws_region)
  login_service = LoginService(
    secret_name=secret_name or settings.secret_name,
    secrets=Boto3SecretsRepository.from_session(session),
    oauth2_provider=RequestsOAuth2Provider(),
  )
  return LoginHandler(login_service)
