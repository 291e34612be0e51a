"""API server entrypoint."""
from __future__ import annotations

import uvicorn

from neptune_query.adapters.input.api.fastapi_adapter import FastAPIAdapter
from neptune_query.adapters.presentation.json_presenter import JsonPresenter
from neptune_query.common.config import get_settings, load_environment
from neptune_query.common.container import create_query_service
from neptune_query.common.logging_setup import configure_logging


def get_app():
  load_environment()
  settings = get_settings()
  configure_logging(settings.log_level, with_timestamps=True)
  adapter = FastAPIAdapter.build(lambda: create_query_service(settings), JsonPresenter())
  return adapter.app


def main() -> None:
  uvicorn.run(get_app(), host='0.0.0.0', port=8080)


if __name__ == '__main__':
  main()
