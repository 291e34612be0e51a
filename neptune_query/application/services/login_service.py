"""Exchanges the stored API client credentials for an access token."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from neptune_query.domain.errors import LoginError
from neptune_query.domain.value_objects.oauth2_credentials import ApiAuthSecret
from neptune_query.ports.output.oauth2_provider import OAuth2TokenProvider
from neptune_query.ports.output.secrets_repository import SecretsRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
  access_token: str
  token_type: str
  expires_at: datetime


class LoginService:
  """Fetches client credentials from Secrets Manager and requests a token."""

  def __init__(
    self,
    secret_name: str,
    secrets: SecretsRepository,
    oauth2_provider: OAuth2TokenProvider,
  ):
    self._secret_name = secret_name
    self._secrets = secrets
    self._oauth2_provider = oauth2_provider

  def login(self) -> LoginResult:
    if not self._secret_name:
      raise LoginError('secret name is required')

    secret = ApiAuthSecret.from_secret_string(self._secrets.get_secret_string(self._secret_name))
    token = self._oauth2_provider.obtain_token(secret.to_oauth2_config())
    logger.debug('Obtained %s token valid for %ss', token.token_type, token.expires_in)

    return LoginResult(
      access_token=token.access_token,
      token_type=token.token_type,
      expires_at=token.expires_at,
    )
