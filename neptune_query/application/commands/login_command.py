"""Command object representing a token login."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_SECRET_NAME = 'lrl-dtf-sdr-api-auth-secrets'
TOKEN_ENV_KEY = 'NEPTUNE_TOKEN'


@dataclass(frozen=True)
class LoginCommand:
  secret_name: str = DEFAULT_SECRET_NAME
  write_env: bool = True
  env_file: Optional[str] = None

  def __post_init__(self) -> None:
    if not self.secret_name:
      raise ValueError('secret_name is required')
