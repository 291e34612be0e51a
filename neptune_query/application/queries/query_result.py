"""Application-level query result representation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class QueryStatus(str, Enum):
  SUCCESS = 'success'
  ERROR = 'error'


@dataclass
class QueryResult:
  status: QueryStatus
  query_type: str
  processed: str = ''
  raw_response: str = ''
  execution_time: float = 0.0
  timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
  error: Optional[str] = None
