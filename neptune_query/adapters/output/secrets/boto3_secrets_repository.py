"""AWS Secrets Manager access through boto3."""
from __future__ import annotations

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from neptune_query.domain.errors import LoginError
from neptune_query.ports.output.secrets_repository import SecretsRepository


class Boto3SecretsRepository(SecretsRepository):
  def __init__(self, client: Any):
    self._client = client

  @classmethod
  def from_session(cls, session: Any) -> 'Boto3SecretsRepository':
    return cls(session.client('secretsmanager'))

  def get_secret_string(self, secret_name: str) -> Optional[str]:
    try:
      response = self._client.get_secret_value(SecretId=secret_name)
    except (BotoCoreError, ClientError) as exc:
      raise LoginError(f'get secret {secret_name!r}: {exc}') from exc
    return response.get('SecretString')
