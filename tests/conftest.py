"""Test configuration for pytest."""
from __future__ import annotations

import logging

import pytest

from neptune_query.domain.value_objects.credentials import AwsSigningCredentials


@pytest.fixture
def aws_credentials() -> AwsSigningCredentials:
  return AwsSigningCredentials(
    access_key='AKIDEXAMPLE',
    secret_key='wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY',
  )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
  """Keep developer settings out of the tests."""
  for name in (
    'NEPTUNE_URL',
    'NEPTUNE_TOKEN',
    'NEPTUNE_APPSYNC_API_ID',
    'NEPTUNE_APPSYNC_API_NAME',
    'NEPTUNE_CACHE_PATH',
    'NEPTUNE_SECRET_NAME',
    'NEPTUNE_LOG_LEVEL',
    'AWS_PROFILE',
    'AWS_REGION',
    'AWS_DEFAULT_REGION',
  ):
    # setenv first so teardown also drops values loaded from .env files
    monkeypatch.setenv(name, '')
    monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_package_logger():
  """Undo handlers installed by the CLI so they never outlive a test's streams."""
  yield
  logger = logging.getLogger('neptune_query')
  for handler in list(logger.handlers):
    logger.removeHandler(handler)
  logger.setLevel(logging.NOTSET)
  logger.propagate = True
