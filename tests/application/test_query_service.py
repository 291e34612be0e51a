import io
import json

import pytest

from helpers import (
  APPSYNC_URL,
  RecordingRepository,
  StaticCredentialProvider,
  executed_response,
  expected_sigv4_signature,
  header_signature,
)
from neptune_query.adapters.output.auth.request_signer import BotocoreRequestSigner
from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand, QueryType
from neptune_query.application.queries.query_result import QueryStatus
from neptune_query.application.services.endpoint_resolver import EndpointLocator
from neptune_query.application.services.query_executor import QueryExecutor
from neptune_query.application.services.query_service_impl import QueryServiceImpl
from neptune_query.domain.errors import QueryValidationError, ResponseShapeError, TransportError
from neptune_query.domain.value_objects.credentials import BearerToken
from neptune_query.domain.value_objects.endpoint_selector import Auto
from neptune_query.domain.value_objects.query_request import QueryRequest
from neptune_query.ports.output.graphql_repository import HttpResponse

COUNT_RESPONSE = '{"data":{"executeQuery":"{\\"data\\":{\\"count\\":5}}"}}'


class TTYStream(io.StringIO):
  def isatty(self):
    return True


def _executor(credentials, response, region='us-east-1', url=APPSYNC_URL):
  repository = RecordingRepository(response)
  executor = QueryExecutor(
    endpoint=EndpointLocator(resolver=None, selector=Auto(), region=region, explicit_url=url),
    credential_provider=StaticCredentialProvider(credentials),
    signer=BotocoreRequestSigner(),
    repository=repository,
  )
  return executor, repository


def test_count_query_end_to_end(aws_credentials):
  executor, repository = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))
  service = QueryServiceImpl(executor)

  processed, raw = service.execute_query('g.V().count()', 'gremlin')

  assert processed == '{\n  "count": 5\n}'
  assert raw == COUNT_RESPONSE
  sent = repository.requests[0]
  assert sent.method == 'POST'
  assert sent.url == APPSYNC_URL
  assert sent.body == QueryRequest('g.V().count()', 'gremlin').to_body()
  assert header_signature(sent) == expected_sigv4_signature(sent, aws_credentials.secret_key, 'us-east-1')
  assert repository.timeouts == [30.0]


def test_region_is_inferred_from_url_when_not_configured(aws_credentials):
  executor, repository = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE), region=None)

  executor.execute('g.V().count()', 'gremlin')

  assert '/us-east-1/appsync/aws4_request' in repository.requests[0].headers['Authorization']


def test_bearer_mode_does_not_need_a_region():
  executor, repository = _executor(
    BearerToken('tok'),
    HttpResponse(200, COUNT_RESPONSE),
    region=None,
    url='https://neptune.example.com/graphql',
  )

  executor.execute('g.V().count()', 'gremlin')

  assert repository.requests[0].headers['Authorization'] == 'Bearer tok'


def test_blank_query_makes_no_request(aws_credentials):
  executor, repository = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))
  service = QueryServiceImpl(executor)

  with pytest.raises(QueryValidationError):
    service.execute_query('   ', 'gremlin')
  assert repository.requests == []


def test_non_200_is_a_transport_error(aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(403, '{"message":"forbidden"}'))

  with pytest.raises(TransportError) as excinfo:
    executor.execute('g.V()', 'gremlin')

  assert excinfo.value.status_code == 403
  assert excinfo.value.raw_response == '{"message":"forbidden"}'
  assert 'status code 403' in str(excinfo.value)


def test_unparseable_body_raises_with_raw_response(aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(200, 'upstream said no'))

  with pytest.raises(ResponseShapeError) as excinfo:
    QueryServiceImpl(executor).execute_query('g.V()', 'gremlin')

  assert excinfo.value.raw_response == 'upstream said no'


def test_query_file_is_read(tmp_path, aws_credentials):
  executor, repository = _executor(aws_credentials, HttpResponse(200, executed_response({'data': []})))
  query_file = tmp_path / 'people.cypher'
  query_file.write_text('MATCH (n) RETURN n', encoding='utf-8')

  processed, _ = QueryServiceImpl(executor).execute(str(query_file), 'cypher')

  assert processed == '[]'
  envelope = json.loads(repository.requests[0].body)
  assert envelope['variables']['input'] == {'type': 'cypher', 'query': 'MATCH (n) RETURN n'}


def test_query_is_read_from_piped_stdin(aws_credentials):
  executor, repository = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))
  service = QueryServiceImpl(executor, stdin=io.StringIO('g.V().count()\n'))

  processed, _ = service.execute(None, 'gremlin')

  assert processed == '{\n  "count": 5\n}'
  assert json.loads(repository.requests[0].body)['variables']['input']['query'] == 'g.V().count()\n'


def test_terminal_stdin_is_rejected(aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))

  with pytest.raises(QueryValidationError, match='no query provided'):
    QueryServiceImpl(executor, stdin=TTYStream()).execute(None, 'gremlin')


def test_missing_query_file(tmp_path, aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))

  with pytest.raises(QueryValidationError, match='failed to open query file'):
    QueryServiceImpl(executor).execute(str(tmp_path / 'missing.gremlin'), 'gremlin')


def test_run_reports_success(aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(200, COUNT_RESPONSE))

  result = QueryServiceImpl(executor).run(ExecuteQueryCommand(query_type=QueryType.GREMLIN, query='g.V().count()'))

  assert result.status == QueryStatus.SUCCESS
  assert result.query_type == 'gremlin'
  assert result.processed == '{\n  "count": 5\n}'
  assert result.error is None


def test_run_reports_errors_with_raw_response(aws_credentials):
  executor, _ = _executor(aws_credentials, HttpResponse(500, 'boom'))

  result = QueryServiceImpl(executor).run(ExecuteQueryCommand(query='g.V()'))

  assert result.status == QueryStatus.ERROR
  assert result.error == 'API returned status code 500'
  assert result.raw_response == 'boom'


def test_command_rejects_query_and_file():
  with pytest.raises(ValueError):
    ExecuteQueryCommand(query='g.V()', query_file='q.gremlin')
