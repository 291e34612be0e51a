from unittest.mock import MagicMock

import pytest
from botocore.credentials import ReadOnlyCredentials
from botocore.exceptions import ClientError, NoCredentialsError

from neptune_query.adapters.output.auth.credential_providers import Boto3CredentialProvider, StaticTokenProvider
from neptune_query.domain.errors import SigningError
from neptune_query.domain.value_objects.credentials import AuthType, AwsSigningCredentials, BearerToken


@pytest.fixture
def session():
  return MagicMock()


def test_frozen_credentials_are_mapped(session):
  session.get_credentials.return_value.get_frozen_credentials.return_value = ReadOnlyCredentials(
    'AKIDEXAMPLE', 'secret', 'session-token'
  )

  credentials = Boto3CredentialProvider(session).retrieve()

  assert credentials == AwsSigningCredentials(access_key='AKIDEXAMPLE', secret_key='secret', token='session-token')
  assert credentials.auth_type == AuthType.SIGV4


def test_credentials_are_fetched_on_every_call(session):
  session.get_credentials.return_value.get_frozen_credentials.return_value = ReadOnlyCredentials('AK', 'SK', None)
  provider = Boto3CredentialProvider(session)

  provider.retrieve()
  provider.retrieve()

  assert session.get_credentials.call_count == 2


def test_missing_credentials(session):
  session.get_credentials.return_value = None

  with pytest.raises(SigningError, match='no AWS credentials found'):
    Boto3CredentialProvider(session).retrieve()


def test_botocore_error_is_a_signing_error(session):
  session.get_credentials.side_effect = NoCredentialsError()

  with pytest.raises(SigningError, match='failed to load AWS credentials: Unable to locate credentials'):
    Boto3CredentialProvider(session).retrieve()


def test_failed_assume_role_refresh_is_a_signing_error(session):
  error = ClientError({'Error': {'Code': 'AccessDenied', 'Message': 'not authorized'}}, 'AssumeRole')
  session.get_credentials.return_value.get_frozen_credentials.side_effect = error

  with pytest.raises(SigningError, match='failed to load AWS credentials: .*AccessDenied') as excinfo:
    Boto3CredentialProvider(session).retrieve()

  assert excinfo.value.__cause__ is error


def test_static_token():
  credentials = StaticTokenProvider('token-123').retrieve()

  assert credentials == BearerToken('token-123')
  assert credentials.as_headers()['Authorization'] == 'Bearer token-123'


@pytest.mark.parametrize('token', ['', '   '])
def test_blank_static_token_is_a_signing_error(token):
  with pytest.raises(SigningError, match='Bearer token must not be empty'):
    StaticTokenProvider(token).retrieve()
