"""Value objects describing which AppSync API to target."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class ById:
  api_id: str

  def __post_init__(self) -> None:
    if not self.api_id:
      raise ValueError('api_id is required')


@dataclass(frozen=True)
class ByName:
  name: str

  def __post_init__(self) -> None:
    if not self.name:
      raise ValueError('name is required')


@dataclass(frozen=True)
class Auto:
  """Select the only GraphQL API in the account and region."""


EndpointSelector = Union[ById, ByName, Auto]


def selector_from_options(api_id: Optional[str] = None, api_name: Optional[str] = None) -> EndpointSelector:
  """Build a selector from optional settings; an ID takes precedence over a name."""
  if api_id:
    return ById(api_id)
  if api_name:
    return ByName(api_name)
  return Auto()
