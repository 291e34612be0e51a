"""FastAPI adapter exposing the query endpoint and a small web form."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand, QueryType
from neptune_query.application.queries.query_result import QueryStatus
from neptune_query.domain.errors import NeptuneQueryError
from neptune_query.ports.input.query_service import QueryService
from neptune_query.ports.input.result_presenter import ResultPresenter

logger = logging.getLogger(__name__)


class QueryTypeEnum(str, Enum):
  gremlin = 'gremlin'
  cypher = 'cypher'


class QueryPayload(BaseModel):
  """Payload for a single Neptune query."""
  type: QueryTypeEnum = Field(default=QueryTypeEnum.gremlin, description='Query language')
  query: str = Field(default='', description='Gremlin or openCypher query text')

  model_config = {
    'json_schema_extra': {
      'examples': [
        {'type': 'gremlin', 'query': 'g.V().count()'},
        {'type': 'cypher', 'query': 'MATCH (n) RETURN count(n)'},
      ]
    }
  }


INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Neptune Query</title>
  <style>
    body { font-family: sans-serif; margin: 2rem; max-width: 960px; }
    textarea { width: 100%; font-family: monospace; }
    pre { background: #f4f4f4; padding: 1rem; overflow: auto; }
    .error { color: #b00020; }
  </style>
</head>
<body>
  <h1>Neptune Query</h1>
  <form id="query-form">
    <label>Type
      <select name="type">
        <option value="gremlin">gremlin</option>
        <option value="cypher">cypher</option>
      </select>
    </label>
    <p><textarea name="query" rows="8" placeholder="g.V().count()"></textarea></p>
    <button type="submit">Run</button>
  </form>
  <p id="error" class="error"></p>
  <h2>Result</h2>
  <pre id="processed"></pre>
  <details>
    <summary>Raw response</summary>
    <pre id="raw"></pre>
  </details>
  <script>
    document.getElementById('query-form').addEventListener('submit', async (event) => {
      event.preventDefault();
      const form = new FormData(event.target);
      const response = await fetch('/queries', {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({type: form.get('type'), query: form.get('query')}),
      });
      const body = await response.json();
      document.getElementById('error').textContent = body.error || '';
      document.getElementById('processed').textContent = body.processed || '';
      document.getElementById('raw').textContent = body.rawResponse || '';
    });
  </script>
</body>
</html>
"""


class FastAPIAdapter:
  """HTTP front end sharing one query service across requests.

  When the service could not be built at startup, the server still comes up
  and answers every query with that configuration error.
  """

  def __init__(
    self,
    query_service: Optional[QueryService],
    presenter: ResultPresenter,
    startup_error: Optional[NeptuneQueryError] = None,
  ):
    if query_service is None and startup_error is None:
      raise ValueError('either a query service or a startup error is required')
    self._query_service = query_service
    self._startup_error = startup_error
    self._presenter = presenter
    self.app = FastAPI(
      title='Neptune Query API',
      version='0.1.0',
      description='Runs Gremlin and openCypher queries against Amazon Neptune through AppSync.',
    )
    self._configure_routes()

  @classmethod
  def build(cls, query_service_factory: Callable[[], QueryService], presenter: ResultPresenter) -> 'FastAPIAdapter':
    """Builds the shared query service once, keeping any configuration error for later requests."""
    try:
      service = query_service_factory()
    except NeptuneQueryError as exc:
      logger.error('Could not build query service: %s', exc)
      return cls(None, presenter, startup_error=exc)
    return cls(service, presenter)

  def _configure_routes(self) -> None:
    # Plain ``def`` routes run in the threadpool, the pipeline blocks on I/O.
    @self.app.post('/queries', tags=['Queries'])
    def execute_query(payload: QueryPayload):
      """Execute a query and return the processed and raw responses."""
      if self._query_service is None:
        error = str(self._startup_error)
        body = {'type': payload.type.value, 'processed': '', 'rawResponse': '', 'error': error}
        return JSONResponse(status_code=400, content=body)

      command = ExecuteQueryCommand(query_type=QueryType(payload.type.value), query=payload.query)
      result = self._query_service.run(command)
      status_code = 400 if result.status == QueryStatus.ERROR else 200
      return JSONResponse(status_code=status_code, content=self._presenter.present(result))

    @self.app.get('/healthz', tags=['Health'], response_class=PlainTextResponse)
    def healthz():
      """Health check endpoint."""
      return 'ok'

    @self.app.get('/', response_class=HTMLResponse, include_in_schema=False)
    def index():
      return INDEX_HTML
