"""Application-level configuration utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from platformdirs import user_cache_dir

from neptune_query.application.commands.login_command import DEFAULT_SECRET_NAME
from neptune_query.domain.errors import ConfigurationError

APP_NAME = 'nqcli'
CACHE_FILE_NAME = 'appsync_cache.json'


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  neptune_url: Optional[str] = None
  neptune_token: Optional[str] = None
  appsync_api_id: Optional[str] = None
  appsync_api_name: Optional[str] = None
  aws_profile: Optional[str] = None
  aws_region: Optional[str] = None
  cache_path: Optional[str] = None
  secret_name: str = DEFAULT_SECRET_NAME
  log_level: str = 'WARNING'

  def with_overrides(self, aws_profile: Optional[str] = None, aws_region: Optional[str] = None) -> 'Settings':
    """Apply command-line overrides; ``None`` keeps the configured value."""
    return replace(
      self,
      aws_profile=aws_profile or self.aws_profile,
      aws_region=aws_region or self.aws_region,
    )

  def resolved_cache_path(self) -> Path:
    if self.cache_path:
      return Path(self.cache_path).expanduser()
    return Path(user_cache_dir(APP_NAME)) / CACHE_FILE_NAME


def get_settings() -> Settings:
  """Read settings from the (already loaded) environment."""
  return Settings(
    neptune_url=os.getenv('NEPTUNE_URL') or None,
    neptune_token=os.getenv('NEPTUNE_TOKEN') or None,
    appsync_api_id=os.getenv('NEPTUNE_APPSYNC_API_ID') or None,
    appsync_api_name=os.getenv('NEPTUNE_APPSYNC_API_NAME') or None,
    aws_profile=os.getenv('AWS_PROFILE') or None,
    aws_region=os.getenv('AWS_REGION') or os.getenv('AWS_DEFAULT_REGION') or None,
    cache_path=os.getenv('NEPTUNE_CACHE_PATH') or None,
    secret_name=os.getenv('NEPTUNE_SECRET_NAME') or DEFAULT_SECRET_NAME,
    log_level=os.getenv('NEPTUNE_LOG_LEVEL') or 'WARNING',
  )


def load_environment(env_file: Optional[str] = None) -> Optional[Path]:
  """Load variables from a ``.env`` file without overriding the environment.

  An explicit ``env_file`` must exist. Otherwise ``./.env`` and then
  ``~/.env`` are tried and missing files are skipped. Returns the file that
  was loaded, if any.
  """
  for candidate in _env_candidates(env_file):
    if not candidate.exists():
      continue
    if candidate.is_dir():
      if env_file:
        raise ConfigurationError(f'env file {str(candidate)!r} is a directory')
      continue
    try:
      load_dotenv(candidate, override=False)
    except OSError as exc:
      if env_file:
        raise ConfigurationError(f'failed to load env file {str(candidate)!r}: {exc}') from exc
      continue
    return candidate

  if env_file:
    raise ConfigurationError(f'env file {env_file!r} not found')
  return None


def _env_candidates(env_file: Optional[str]) -> List[Path]:
  if env_file:
    return [expand_path(env_file)]
  return [Path.cwd() / '.env', Path.home() / '.env']


def expand_path(path: str) -> Path:
  if not path:
    raise ConfigurationError('empty path')
  return Path(path).expanduser().resolve()


def resolve_env_file_for_write(env_file: Optional[str] = None) -> Path:
  """The env file ``login`` updates: the explicit one, or ``./.env``."""
  if env_file:
    return expand_path(env_file)
  return Path.cwd() / '.env'


def _quote(value: str) -> str:
  escaped = (
    value.replace('\\', '\\\\')
    .replace('"', '\\"')
    .replace('\n', '\\n')
    .replace('\r', '\\r')
  )
  return f'"{escaped}"'


def write_env_value(path: Union[str, Path], key: str, value: str) -> None:
  """Update or append ``key`` in the env file as a double-quoted value."""
  if not key or not key.strip():
    raise ConfigurationError('env key cannot be empty')
  if not path:
    raise ConfigurationError('env file path cannot be empty')

  env_path = Path(path)
  line_value = f'{key}={_quote(value)}'
  lines: List[str] = []
  updated = False

  try:
    existing = env_path.read_text(encoding='utf-8')
  except FileNotFoundError:
    existing = ''
  except OSError as exc:
    raise ConfigurationError(f'read env file {str(env_path)!r}: {exc}') from exc

  for line in existing.splitlines():
    current_key, separator, _ = line.partition('=')
    if separator and current_key.strip() == key:
      line = line_value
      updated = True
    lines.append(line)

  if not updated:
    lines.append(line_value)

  try:
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    os.chmod(env_path, 0o600)
  except OSError as exc:
    raise ConfigurationError(f'write env file {str(env_path)!r}: {exc}') from exc
