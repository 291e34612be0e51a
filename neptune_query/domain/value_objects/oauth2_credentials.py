"""Value objects for the OAuth2 client-credentials login."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from neptune_query.domain.errors import LoginError

AZURE_TOKEN_URL_FORMAT = 'https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token'
DEFAULT_EXPIRES_IN = 3600


@dataclass(frozen=True)
class OAuth2Config:
  """Client-credentials grant against a token endpoint."""
  token_url: str
  client_id: str
  client_secret: str
  scopes: List[str] = field(default_factory=list)

  def __post_init__(self) -> None:
    if not self.token_url:
      raise ValueError('token_url is required for OAuth2')
    if not self.client_id or not self.client_secret:
      raise ValueError('client_id and client_secret are required for client_credentials grant')

  def to_token_request_data(self) -> Dict[str, str]:
    """Build the form-encoded token request payload."""
    data: Dict[str, str] = {
      'grant_type': 'client_credentials',
      'client_id': self.client_id,
      'client_secret': self.client_secret,
    }
    if self.scopes:
      data['scope'] = ' '.join(self.scopes)
    return data


@dataclass
class OAuth2Token:
  """An access token returned by the token endpoint."""
  access_token: str
  token_type: str = 'Bearer'
  expires_in: int = DEFAULT_EXPIRES_IN
  obtained_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

  @property
  def expires_at(self) -> datetime:
    return self.obtained_at + timedelta(seconds=self.expires_in)

  @property
  def is_expired(self) -> bool:
    return datetime.now(timezone.utc) >= self.expires_at

  @staticmethod
  def from_response(response_data: Dict[str, Any]) -> 'OAuth2Token':
    """Create a token from a token endpoint response, filling in defaults."""
    expires_in = response_data.get('expires_in') or 0
    try:
      expires_in = int(expires_in)
    except (TypeError, ValueError):
      expires_in = 0
    if expires_in <= 0:
      expires_in = DEFAULT_EXPIRES_IN

    return OAuth2Token(
      access_token=response_data['access_token'],
      token_type=response_data.get('token_type') or 'Bearer',
      expires_in=expires_in,
    )


@dataclass(frozen=True)
class ApiAuthSecret:
  """The credentials document stored in AWS Secrets Manager."""
  client_id: str = ''
  client_secret: str = ''
  tenant_id: str = ''
  scope: str = ''
  role: str = ''
  ds_client_id: str = ''

  @staticmethod
  def from_secret_string(secret_string: Optional[str]) -> 'ApiAuthSecret':
    if secret_string is None or not secret_string.strip():
      raise LoginError('secret does not contain SecretString payload')
    try:
      payload = json.loads(secret_string)
    except json.JSONDecodeError as exc:
      raise LoginError(f'parse secret JSON: {exc}') from exc
    if not isinstance(payload, dict):
      raise LoginError('parse secret JSON: expected an object')

    secret = ApiAuthSecret(
      client_id=payload.get('ApiAuthClientId') or '',
      client_secret=payload.get('ApiAuthClientSecret') or '',
      tenant_id=payload.get('ApiAuthTenantId') or '',
      scope=payload.get('ApiAuthScope') or '',
      role=payload.get('ApiAuthRole') or '',
      ds_client_id=payload.get('ApiAuthDsClientId') or '',
    )
    secret.validate()
    return secret

  def validate(self) -> None:
    missing = []
    if not self.client_id:
      missing.append('ApiAuthClientId')
    if not self.client_secret:
      missing.append('ApiAuthClientSecret')
    if not self.tenant_id:
      missing.append('ApiAuthTenantId')
    if not self.scope:
      missing.append('ApiAuthScope')
    if missing:
      raise LoginError(f'secret missing fields: {", ".join(missing)}')

  def to_oauth2_config(self) -> OAuth2Config:
    return OAuth2Config(
      token_url=AZURE_TOKEN_URL_FORMAT.format(tenant_id=self.tenant_id),
      client_id=self.client_id,
      client_secret=self.client_secret,
      scopes=[self.scope],
    )
