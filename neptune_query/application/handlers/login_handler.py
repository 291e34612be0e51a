"""Application handler for the token login."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from neptune_query.application.commands.login_command import TOKEN_ENV_KEY, LoginCommand
from neptune_query.application.services.login_service import LoginResult, LoginService
from neptune_query.common.config import resolve_env_file_for_write, write_env_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginOutcome:
  result: LoginResult
  env_path: Optional[str] = None


class LoginHandler:
  """Runs the login and persists the token into the env file when asked."""

  def __init__(self, login_service: LoginService):
    self._login_service = login_service

  def handle(self, command: LoginCommand) -> LoginOutcome:
    result = self._login_service.login()
    if not command.write_env:
      return LoginOutcome(result=result)

    env_path = resolve_env_file_for_write(command.env_file)
    write_env_value(env_path, TOKEN_ENV_KEY, result.access_token)
    logger.info('Updated %s in %s', TOKEN_ENV_KEY, env_path)
    return LoginOutcome(result=result, env_path=str(env_path))
