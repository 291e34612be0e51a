"""Error taxonomy shared by every layer."""
from __future__ import annotations

from typing import Optional


class NeptuneQueryError(Exception):
  """Base exception for the query tool.

  ``raw_response`` keeps the untouched HTTP body when one was received, so
  callers can still show it for diagnostics.
  """

  def __init__(self, message: str, raw_response: Optional[str] = None):
    super().__init__(message)
    self.raw_response = raw_response


class ConfigurationError(NeptuneQueryError):
  """Missing region, credentials, endpoint or env file."""


class QueryValidationError(NeptuneQueryError):
  """The query text is blank or could not be read."""


class DiscoveryError(NeptuneQueryError):
  """The AppSync endpoint could not be selected unambiguously."""


class SigningError(NeptuneQueryError):
  """Credentials could not be retrieved or the request could not be signed."""


class TransportError(NeptuneQueryError):
  """Network failure or non-200 response from the GraphQL endpoint."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    raw_response: Optional[str] = None,
  ):
    super().__init__(message, raw_response=raw_response)
    self.status_code = status_code


class ResponseShapeError(NeptuneQueryError):
  """The response body is not a JSON document."""


class LoginError(NeptuneQueryError):
  """The stored OAuth client credentials are missing or malformed."""
