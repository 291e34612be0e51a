"""Credential sources: a boto3 session or a stored bearer token."""
from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from neptune_query.domain.errors import SigningError
from neptune_query.domain.value_objects.credentials import AwsSigningCredentials, BearerToken
from neptune_query.ports.output.credential_provider import CredentialProvider

logger = logging.getLogger(__name__)


class Boto3CredentialProvider(CredentialProvider):
  """Resolves credentials from the session's provider chain on every call."""

  def __init__(self, session: Any):
    self._session = session

  def retrieve(self) -> AwsSigningCredentials:
    try:
      credentials = self._session.get_credentials()
      if credentials is None:
        raise SigningError(
          'no AWS credentials found; configure a profile with `aws configure` '
          'or `aws sso login`, or run `nq login` to use a bearer token'
        )
      frozen = credentials.get_frozen_credentials()
    except (BotoCoreError, ClientError) as exc:
      raise SigningError(f'failed to load AWS credentials: {exc}') from exc

    return AwsSigningCredentials(
      access_key=frozen.access_key,
      secret_key=frozen.secret_key,
      token=frozen.token,
    )


class StaticTokenProvider(CredentialProvider):
  """Supplies the bearer token written by ``nq login``."""

  def __init__(self, token: str):
    self._token = token

  def retrieve(self) -> BearerToken:
    try:
      return BearerToken(self._token)
    except ValueError as exc:
      raise SigningError(str(exc)) from exc
