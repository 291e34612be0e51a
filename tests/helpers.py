"""Fakes shared by the test modules."""
from __future__ import annotations

import hashlib
import hmac
import json
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from neptune_query.domain.entities.endpoint_cache import CacheEntry, CacheFile
from neptune_query.domain.entities.graphql_api import GraphqlApiDescriptor
from neptune_query.ports.output.graphql_repository import HttpResponse
from neptune_query.ports.output.request_signer import HttpRequest

APPSYNC_URL = 'https://abc123.appsync-api.us-east-1.amazonaws.com/graphql'


def executed_response(inner) -> str:
  """A resolver response whose ``executeQuery`` field carries ``inner`` as a string."""
  return json.dumps({'data': {'executeQuery': json.dumps(inner)}})


def _hmac(key: bytes, message: str) -> bytes:
  return hmac.new(key, message.encode('utf-8'), hashlib.sha256).digest()


def expected_sigv4_signature(request: HttpRequest, secret_key: str, region: str, service: str = 'appsync') -> str:
  """Recompute the SigV4 signature from the request as it will be sent."""
  headers = {name.lower(): value for name, value in request.headers.items()}
  _, _, credential_fields = headers['authorization'].partition(' ')
  fields = dict(part.strip().split('=', 1) for part in credential_fields.split(','))
  signed_headers = fields['SignedHeaders']

  url = urlsplit(request.url)
  headers.setdefault('host', url.netloc)
  canonical_headers = ''.join(
    f'{name}:{" ".join(headers[name].split())}\n' for name in signed_headers.split(';')
  )
  canonical_request = '\n'.join([
    request.method,
    url.path or '/',
    url.query,
    canonical_headers,
    signed_headers,
    hashlib.sha256(request.body).hexdigest(),
  ])

  amz_date = headers['x-amz-date']
  date = amz_date[:8]
  scope = f'{date}/{region}/{service}/aws4_request'
  string_to_sign = '\n'.join([
    'AWS4-HMAC-SHA256',
    amz_date,
    scope,
    hashlib.sha256(canonical_request.encode('utf-8')).hexdigest(),
  ])

  key = _hmac(f'AWS4{secret_key}'.encode('utf-8'), date)
  for part in (region, service, 'aws4_request'):
    key = _hmac(key, part)
  return hmac.new(key, string_to_sign.encode('utf-8'), hashlib.sha256).hexdigest()


def header_signature(request: HttpRequest) -> str:
  authorization = request.headers['Authorization']
  return authorization.rsplit('Signature=', 1)[1]


class FakeCatalog:
  def __init__(self, apis: Optional[List[GraphqlApiDescriptor]] = None):
    self.apis = list(apis or [])
    self.get_calls: List[str] = []
    self.list_calls = 0

  def get_api(self, api_id: str) -> Optional[GraphqlApiDescriptor]:
    self.get_calls.append(api_id)
    for api in self.apis:
      if api.api_id == api_id:
        return api
    return None

  def list_apis(self) -> List[GraphqlApiDescriptor]:
    self.list_calls += 1
    return list(self.apis)


class MemoryCache:
  def __init__(self, entries: Optional[Dict[str, CacheEntry]] = None, fail_writes: bool = False):
    self.entries = dict(entries or {})
    self.fail_writes = fail_writes

  def read(self) -> CacheFile:
    return CacheFile(entries=dict(self.entries))

  def lookup(self, key: str) -> Optional[str]:
    entry = self.entries.get(key)
    return entry.url if entry and entry.url else None

  def write(self, key: str, entry: CacheEntry) -> None:
    if self.fail_writes:
      raise PermissionError('read-only cache directory')
    self.entries[key] = entry


class StaticCredentialProvider:
  def __init__(self, credentials):
    self.credentials = credentials
    self.calls = 0

  def retrieve(self):
    self.calls += 1
    return self.credentials


class RecordingRepository:
  def __init__(self, response: HttpResponse):
    self.response = response
    self.requests: List[HttpRequest] = []
    self.timeouts: List[float] = []

  def send(self, request: HttpRequest, timeout: float) -> HttpResponse:
    self.requests.append(request)
    self.timeouts.append(timeout)
    return self.response
