"""Streamlit adapter for interactive exploration."""
from __future__ import annotations

import streamlit as st

from neptune_query.application.commands.execute_query_command import ExecuteQueryCommand, QueryType
from neptune_query.application.queries.query_result import QueryStatus
from neptune_query.ports.input.query_service import QueryService
from neptune_query.ports.input.result_presenter import ResultPresenter


class StreamlitAdapter:
  def __init__(self, query_service: QueryService, presenter: ResultPresenter):
    self._query_service = query_service
    self._presenter = presenter

  def render(self) -> None:
    st.set_page_config(page_title='Neptune Query', layout='wide')
    st.title('Neptune Query')

    query_type = st.selectbox(
      'Query type',
      options=[member.value for member in QueryType],
      key='query_type',
    )
    query_text = st.text_area(
      'Query',
      key='query_text',
      height=200,
      placeholder='g.V().count()',
    )

    if st.button('Run query', key='query_submit', type='primary'):
      if not query_text.strip():
        st.error('Enter a query to run')
        return

      command = ExecuteQueryCommand(query_type=QueryType(query_type), query=query_text)
      with st.spinner('Running query...'):
        result = self._query_service.run(command)

      if result.status == QueryStatus.ERROR:
        st.error(result.error or 'query failed')
      st.markdown(self._presenter.present(result))

      with st.expander('Raw response', expanded=False):
        st.code(result.raw_response or '(empty)', language='json')
