"""Requests-based OAuth2 token provider implementation."""
from __future__ import annotations

from typing import Optional

import requests

from neptune_query.domain.value_objects.oauth2_credentials import OAuth2Config, OAuth2Token
from neptune_query.ports.output.oauth2_provider import OAuth2Error, OAuth2TokenProvider


class RequestsOAuth2Provider(OAuth2TokenProvider):
  """OAuth2 token provider using the requests library."""

  def __init__(self, timeout: int = 30, session: Optional[requests.Session] = None):
    self._timeout = timeout
    self._session = session or requests.Session()

  def obtain_token(self, config: OAuth2Config) -> OAuth2Token:
    """Exchange client credentials for an access token."""
    try:
      response = self._session.post(
        config.token_url,
        data=config.to_token_request_data(),
        headers={'Content-Type': 'application/x-www-form-urlencoded'},
        timeout=self._timeout,
      )
    except requests.RequestException as e:
      raise OAuth2Error(f'request token: {str(e)}') from e

    if response.status_code != 200:
      error_code = None
      try:
        error_code = response.json().get('error')
      except (ValueError, AttributeError):
        pass
      raise OAuth2Error(
        f'token endpoint returned {response.status_code}: {response.text.strip()}',
        error_code=error_code,
        status_code=response.status_code,
      )

    try:
      token_data = response.json()
    except ValueError as e:
      raise OAuth2Error(f'decode token response: {str(e)}') from e

    if not isinstance(token_data, dict) or not token_data.get('access_token'):
      raise OAuth2Error('empty access token in response')

    return OAuth2Token.from_response(token_data)
