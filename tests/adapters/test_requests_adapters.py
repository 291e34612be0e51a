from unittest.mock import MagicMock

import pytest
import requests

from helpers import APPSYNC_URL
from neptune_query.adapters.output.api.requests_repository import RequestsGraphqlRepository
from neptune_query.adapters.output.oauth2.requests_oauth2_provider import RequestsOAuth2Provider
from neptune_query.domain.errors import TransportError
from neptune_query.domain.value_objects.oauth2_credentials import OAuth2Config
from neptune_query.ports.output.oauth2_provider import OAuth2Error
from neptune_query.ports.output.request_signer import HttpRequest


def _response(status_code: int, text: str = '', json_data=None):
  response = MagicMock()
  response.status_code = status_code
  response.text = text
  if json_data is None:
    response.json.side_effect = ValueError('no json')
  else:
    response.json.return_value = json_data
  return response


@pytest.fixture
def config() -> OAuth2Config:
  return OAuth2Config(
    token_url='https://login.microsoftonline.com/tenant/oauth2/v2.0/token',
    client_id='client',
    client_secret='secret',
    scopes=['api://neptune/.default'],
  )


def test_repository_sends_body_bytes_untouched():
  session = MagicMock()
  session.request.return_value = _response(200, '{"data":{}}')
  request = HttpRequest('POST', APPSYNC_URL, b'{"query": "x"}', {'Authorization': 'sig'})

  response = RequestsGraphqlRepository(session).send(request, timeout=30)

  session.request.assert_called_once_with(
    'POST',
    APPSYNC_URL,
    data=b'{"query": "x"}',
    headers={'Authorization': 'sig'},
    timeout=30,
  )
  assert response.status_code == 200
  assert response.text == '{"data":{}}'


def test_repository_timeout_is_a_transport_error():
  session = MagicMock()
  session.request.side_effect = requests.Timeout('slow')

  with pytest.raises(TransportError, match='timed out after 30s'):
    RequestsGraphqlRepository(session).send(HttpRequest('POST', APPSYNC_URL, b'{}'), timeout=30)


def test_repository_connection_error_is_a_transport_error():
  session = MagicMock()
  session.request.side_effect = requests.ConnectionError('refused')

  with pytest.raises(TransportError, match='failed to execute request'):
    RequestsGraphqlRepository(session).send(HttpRequest('POST', APPSYNC_URL, b'{}'), timeout=30)


def test_token_request_uses_client_credentials(config):
  session = MagicMock()
  session.post.return_value = _response(200, json_data={'access_token': 'tok', 'token_type': 'Bearer', 'expires_in': 600})

  token = RequestsOAuth2Provider(session=session).obtain_token(config)

  _, kwargs = session.post.call_args
  assert session.post.call_args[0][0] == config.token_url
  assert kwargs['data'] == {
    'grant_type': 'client_credentials',
    'client_id': 'client',
    'client_secret': 'secret',
    'scope': 'api://neptune/.default',
  }
  assert token.access_token == 'tok'
  assert token.expires_in == 600


def test_token_defaults_are_applied(config):
  session = MagicMock()
  session.post.return_value = _response(200, json_data={'access_token': 'tok', 'expires_in': 0})

  token = RequestsOAuth2Provider(session=session).obtain_token(config)

  assert token.token_type == 'Bearer'
  assert token.expires_in == 3600


def test_token_endpoint_error_keeps_status_and_body(config):
  session = MagicMock()
  session.post.return_value = _response(
    401,
    text='{"error": "invalid_client"}',
    json_data={'error': 'invalid_client'},
  )

  with pytest.raises(OAuth2Error) as excinfo:
    RequestsOAuth2Provider(session=session).obtain_token(config)

  assert excinfo.value.status_code == 401
  assert excinfo.value.error_code == 'invalid_client'
  assert 'invalid_client' in str(excinfo.value)


def test_missing_access_token_is_an_error(config):
  session = MagicMock()
  session.post.return_value = _response(200, json_data={'token_type': 'Bearer'})

  with pytest.raises(OAuth2Error, match='empty access token'):
    RequestsOAuth2Provider(session=session).obtain_token(config)


def test_undecodable_token_response_is_an_error(config):
  session = MagicMock()
  session.post.return_value = _response(200, text='<html>')

  with pytest.raises(OAuth2Error, match='decode token response'):
    RequestsOAuth2Provider(session=session).obtain_token(config)
