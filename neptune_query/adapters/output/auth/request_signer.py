"""Attaches bearer headers or a SigV4 signature to outgoing requests."""
from __future__ import annotations

from typing import Dict

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials as BotocoreCredentials
from botocore.exceptions import BotoCoreError

from neptune_query.domain.errors import SigningError
from neptune_query.domain.value_objects.credentials import AwsSigningCredentials, BearerToken, Credentials
from neptune_query.ports.output.request_signer import HttpRequest, RequestSigner


class BotocoreRequestSigner(RequestSigner):
  """Signs with botocore's SigV4 implementation, or adds a bearer header.

  The mode follows the type of credentials supplied. The SigV4 payload hash
  is computed over ``request.body`` as given, so the returned request must
  be sent with exactly those bytes.
  """

  def sign(
    self,
    request: HttpRequest,
    credentials: Credentials,
    service_name: str,
    region: str,
  ) -> HttpRequest:
    if isinstance(credentials, BearerToken):
      return self._with_headers(request, credentials.as_headers())
    if isinstance(credentials, AwsSigningCredentials):
      return self._sign_sigv4(request, credentials, service_name, region)
    raise SigningError(f'unsupported credentials type: {type(credentials).__name__}')

  @staticmethod
  def _with_headers(request: HttpRequest, extra: Dict[str, str]) -> HttpRequest:
    headers = dict(request.headers)
    headers.update(extra)
    return HttpRequest(method=request.method, url=request.url, body=request.body, headers=headers)

  @staticmethod
  def _sign_sigv4(
    request: HttpRequest,
    credentials: AwsSigningCredentials,
    service_name: str,
    region: str,
  ) -> HttpRequest:
    if not region:
      raise SigningError('AWS region is required to sign the request')

    aws_request = AWSRequest(
      method=request.method,
      url=request.url,
      data=request.body,
      headers=dict(request.headers),
    )
    botocore_credentials = BotocoreCredentials(
      credentials.access_key,
      credentials.secret_key,
      credentials.token,
    )
    try:
      SigV4Auth(botocore_credentials, service_name, region).add_auth(aws_request)
    except (BotoCoreError, ValueError, TypeError) as exc:
      raise SigningError(f'failed to sign request: {exc}') from exc

    return HttpRequest(
      method=request.method,
      url=request.url,
      body=request.body,
      headers={name: value for name, value in aws_request.headers.items()},
    )
