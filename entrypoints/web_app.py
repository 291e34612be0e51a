"""Streamlit entrypoint: ``streamlit run entrypoints/web_app.py``."""
from __future__ import annotations

import streamlit as st

from neptune_query.adapters.input.web.streamlit_adapter import StreamlitAdapter
from neptune_query.adapters.presentation.markdown_presenter import MarkdownPresenter
from neptune_query.common.config import get_settings, load_environment
from neptune_query.common.container import create_query_service
from neptune_query.domain.errors import NeptuneQueryError


def main() -> None:
  load_environment()
  try:
    query_service = create_query_service(get_settings())
  except NeptuneQueryError as exc:
    st.error(f'Configuration error: {exc}')
    return
  StreamlitAdapter(query_service, MarkdownPresenter()).render()


if __name__ == '__main__':
  main()
