"""Click command line for running Neptune queries."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import click
from click.shell_completion import get_completion_class

from neptune_query.adapters.presentation.text_presenter import TextPresenter
from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand, QueryType
from neptune_query.application.commands.login_command import LoginCommand
from neptune_query.application.handlers.login_handler import LoginHandler
from neptune_query.application.queries.query_result import QueryStatus
from neptune_query.common.config import Settings, get_settings, load_environment
from neptune_query.common.container import create_endpoint_cache, create_login_handler, create_query_service
from neptune_query.common.logging_setup import configure_logging
from neptune_query.domain.errors import NeptuneQueryError
from neptune_query.ports.input.query_service import QueryService
from neptune_query.ports.input.result_presenter import ResultPresenter

logger = logging.getLogger(__name__)

PROG_NAME = 'nq'
DEFAULT_LOGIN_PROFILE = 'dsoadev'
DEFAULT_LOGIN_REGION = 'us-east-2'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_SERVER_PORT = 8080


@dataclass
class CLIState:
  """Shared between the group and its subcommands through ``ctx.obj``."""
  settings: Settings = field(default_factory=Settings)
  env_file: Optional[str] = None
  query_service_factory: Callable[[Settings], QueryService] = create_query_service
  login_handler_factory: Callable[[Settings, Optional[str]], LoginHandler] = create_login_handler
  presenter: ResultPresenter = field(default_factory=TextPresenter)


def _build_query_command(argument: Optional[str], query_type: QueryType) -> ExecuteQueryCommand:
  """An existing file is read, anything else is inline query text."""
  if argument is None:
    return ExecuteQueryCommand(query_type=query_type)
  if not argument:
    # Path('') is the working directory.
    return ExecuteQueryCommand(query_type=query_type, query=argument)

  path = Path(argument).expanduser()
  try:
    is_dir = path.is_dir()
    is_file = path.is_file()
  except (OSError, ValueError):
    # Long inline queries can exceed the file name limit.
    is_dir = is_file = False

  if is_dir:
    raise click.ClickException(f'query path {argument!r} is a directory')
  if is_file:
    return ExecuteQueryCommand(query_type=query_type, query_file=str(path))
  return ExecuteQueryCommand(query_type=query_type, query=argument)


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--env-file', default=None, help='Path to a .env file (default: ./.env then ~/.env)')
@click.option('--aws-profile', default=None, help='AWS shared config profile')
@click.option('--aws-region', default=None, help='AWS region used for discovery and signing')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.version_option(package_name='neptune-query', prog_name=PROG_NAME)
@click.pass_context
def cli(
  ctx: click.Context,
  env_file: Optional[str],
  aws_profile: Optional[str],
  aws_region: Optional[str],
  verbose: bool,
) -> None:
  """Run Gremlin and openCypher queries against Neptune through AppSync."""
  state = ctx.ensure_object(CLIState)
  try:
    load_environment(env_file)
  except NeptuneQueryError as exc:
    raise click.ClickException(str(exc)) from exc

  settings = get_settings().with_overrides(aws_profile=aws_profile, aws_region=aws_region)
  configure_logging('DEBUG' if verbose else settings.log_level)
  state.settings = settings
  state.env_file = env_file


@cli.command('query')
@click.argument('query_or_file', required=False)
@click.option(
  '--type',
  'query_type',
  type=click.Choice([member.value for member in QueryType]),
  default=QueryType.GREMLIN.value,
  show_default=True,
  help='Query language',
)
@click.pass_obj
def query(state: CLIState, query_or_file: Optional[str], query_type: str) -> None:
  """Run a query given inline, as a file path, or piped on stdin.

  Examples:

    nq query "g.V().count()"

    nq query --type cypher queries/people.cypher

    echo "g.V().limit(1)" | nq query
  """
  command = _build_query_command(query_or_file, QueryType(query_type))
  try:
    service = state.query_service_factory(state.settings)
  except NeptuneQueryError as exc:
    raise click.ClickException(str(exc)) from exc

  result = service.run(command)
  if result.status == QueryStatus.ERROR:
    if result.raw_response:
      logger.debug('Raw response: %s', result.raw_response)
    raise click.ClickException(result.error or 'query failed')
  click.echo(state.presenter.present(result))


@cli.command('login')
@click.option('--secret-name', default=None, help='Secrets Manager secret holding the API client credentials')
@click.option('--aws-profile', 'login_profile', default=DEFAULT_LOGIN_PROFILE, show_default=True,
              help='AWS profile used to read the secret')
@click.option('--aws-region', 'login_region', default=DEFAULT_LOGIN_REGION, show_default=True,
              help='AWS region used to read the secret')
@click.option('--no-write', is_flag=True, help='Do not update NEPTUNE_TOKEN in the env file')
@click.option('--print-token', is_flag=True, help='Print the access token to stdout')
@click.pass_obj
def login(
  state: CLIState,
  secret_name: Optional[str],
  login_profile: str,
  login_region: str,
  no_write: bool,
  print_token: bool,
) -> None:
  """Fetch a fresh NEPTUNE_TOKEN with the Azure AD client credentials grant."""
  settings = state.settings.with_overrides(aws_profile=login_profile, aws_region=login_region)
  try:
    handler = state.login_handler_factory(settings, secret_name)
    command = LoginCommand(
      secret_name=secret_name or settings.secret_name,
      write_env=not no_write,
      env_file=state.env_file,
    )
    outcome = handler.handle(command)
  except NeptuneQueryError as exc:
    raise click.ClickException(str(exc)) from exc

  if outcome.env_path:
    click.echo(f'Updated NEPTUNE_TOKEN in {outcome.env_path}', err=True)
  if print_token:
    click.echo(outcome.result.access_token)

  expires = outcome.result.expires_at.astimezone().strftime('%a, %d %b %Y %H:%M:%S %Z')
  click.echo(f'Token acquired ({outcome.result.token_type}), expires {expires}', err=True)


@cli.command('server')
@click.option('--host', default=DEFAULT_SERVER_HOST, show_default=True, help='Interface to bind')
@click.option('--port', default=DEFAULT_SERVER_PORT, show_default=True, type=click.IntRange(1, 65535))
@click.pass_obj
def server(state: CLIState, host: str, port: int) -> None:
  """Serve the HTTP query API and a small web form."""
  import uvicorn

  from neptune_query.adapters.input.api.fastapi_adapter import FastAPIAdapter
  from neptune_query.adapters.presentation.json_presenter import JsonPresenter

  configure_logging(state.settings.log_level, with_timestamps=True)
  settings = state.settings
  adapter = FastAPIAdapter.build(lambda: state.query_service_factory(settings), JsonPresenter())
  logger.info('HTTP server starting on %s:%d', host, port)
  uvicorn.run(adapter.app, host=host, port=port)


@cli.command('completion')
@click.argument('shell', type=click.Choice(['bash', 'zsh', 'fish']))
@click.pass_context
def completion(ctx: click.Context, shell: str) -> None:
  """Print the shell completion script.

  Example: nq completion bash > /etc/bash_completion.d/nq
  """
  completion_class = get_completion_class(shell)
  root = ctx.find_root()
  complete_var = f'_{PROG_NAME.upper()}_COMPLETE'
  click.echo(completion_class(root.command, {}, PROG_NAME, complete_var).source())


@cli.group('cache')
def cache() -> None:
  """Inspect or clear the AppSync endpoint cache."""


@cache.command('show')
@click.pass_obj
def cache_show(state: CLIState) -> None:
  endpoint_cache = create_endpoint_cache(state.settings)
  click.echo(f'# {endpoint_cache.path}', err=True)
  click.echo(json.dumps(endpoint_cache.read().to_dict(), indent=2))


@cache.command('clear')
@click.pass_obj
def cache_clear(state: CLIState) -> None:
  endpoint_cache = create_endpoint_cache(state.settings)
  try:
    removed = endpoint_cache.clear()
  except OSError as exc:
    raise click.ClickException(f'remove {endpoint_cache.path}: {exc}') from exc
  if removed:
    click.echo(f'Removed {endpoint_cache.path}')
  else:
    click.echo(f'No cache at {endpoint_cache.path}')


def main() -> None:
  cli(prog_name=PROG_NAME)
