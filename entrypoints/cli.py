"""CLI entrypoint for neptune-query."""
from __future__ import annotations

from neptune_query.adapters.input.cli.cli_adapter import main

if __name__ == '__main__':
  main()
