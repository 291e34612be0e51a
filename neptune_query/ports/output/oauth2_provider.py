"""Output port for OAuth2 token management."""
from __future__ import annotations

from typing import Optional, Protocol

from neptune_query.domain.errors import NeptuneQueryError
from neptune_query.domain.value_objects.oauth2_credentials import OAuth2Config, OAuth2Token


class OAuth2TokenProvider(Protocol):
  """Interface for exchanging client credentials for an access token.

  This port abstracts the OAuth2 token exchange mechanism so the login
  service stays agnostic of the HTTP library.
  """

  def obtain_token(self, config: OAuth2Config) -> OAuth2Token:
    """Exchange credentials for an access token.

    Args:
      config: OAuth2 configuration with credentials and token URL

    Returns:
      OAuth2Token with access token, type and lifetime

    Raises:
      OAuth2Error: If token exchange fails
    """
    ...


class OAuth2Error(NeptuneQueryError):
  """Base exception for OAuth2-related errors."""

  def __init__(
    self,
    message: str,
    error_code: Optional[str] = None,
    status_code: Optional[int] = None,
  ):
    super().__init__(message)
    self.error_code = error_code
    self.status_code = status_code
