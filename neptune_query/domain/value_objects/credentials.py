"""Value objects for request authentication."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class AuthType(str, Enum):
  SIGV4 = 'sigv4'
  BEARER = 'bearer'


@dataclass(frozen=True)
class AwsSigningCredentials:
  """AWS key material used to SigV4-sign a request."""

  access_key: str
  secret_key: str
  token: Optional[str] = None

  @property
  def auth_type(self) -> AuthType:
    return AuthType.SIGV4

  def __repr__(self) -> str:
    return f'AwsSigningCredentials(access_key={self.access_key!r}, secret_key=***, token=***)'


@dataclass(frozen=True)
class BearerToken:
  """An OAuth access token sent as ``Authorization: Bearer``."""

  token: str

  def __post_init__(self) -> None:
    if not self.token or not self.token.strip():
      raise ValueError('Bearer token must not be empty')

  @property
  def auth_type(self) -> AuthType:
    return AuthType.BEARER

  def as_headers(self) -> Dict[str, str]:
    return {
      'Authorization': f'Bearer {self.token}',
      'Content-Type': 'application/json',
    }

  def __repr__(self) -> str:
    return 'BearerToken(token=***)'


Credentials = Union[AwsSigningCredentials, BearerToken]
