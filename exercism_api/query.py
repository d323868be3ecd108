"""Query-string contributors.

A contributor is any object with a ``contribute(params)`` method that appends
zero or more ``(key, value)`` pairs to a :class:`QueryParams` and returns it,
so contributions chain. Four parameter shapes cover the Exercism APIs:

- :class:`OptionalParam`: one pair if the value is present.
- :class:`RepeatedParam`: one pair per element (``tags[]=a&tags[]=b``).
- :class:`JoinedParam`: one pair, elements joined by a single space.
- :class:`ConditionalParam`: a fixed pair if a flag is set.

Absent or empty inputs contribute nothing, not even an empty value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple


class QueryContributor(Protocol):
    def contribute(self, params: "QueryParams") -> "QueryParams":
        ...


def to_query_value(value: Any) -> str:
    """Render a scalar the way the Exercism APIs expect it."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryParams:
    """Ordered, append-only sequence of query pairs. Duplicate keys are kept."""

    def __init__(self, pairs: Optional[Iterable[Tuple[str, str]]] = None):
        self._pairs: List[Tuple[str, str]] = list(pairs or [])

    def add(self, key: str, value: Any) -> "QueryParams":
        self._pairs.append((key, to_query_value(value)))
        return self

    def apply(self, contributor: Optional[QueryContributor]) -> "QueryParams":
        if contributor is None:
            return self
        return contributor.contribute(self)

    def extend(self, contributors: Iterable[Optional[QueryContributor]]) -> "QueryParams":
        params = self
        for contributor in contributors:
            params = params.apply(contributor)
        return params

    def items(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def get_all(self, key: str) -> List[str]:
        return [value for k, value in self._pairs if k == key]

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryParams):
            return self._pairs == other._pairs
        if isinstance(other, list):
            return self._pairs == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"QueryParams({self._pairs!r})"


@dataclass(frozen=True)
class OptionalParam:
    key: str
    value: Any = None

    def contribute(self, params: QueryParams) -> QueryParams:
        # An empty string is as absent as None
        if self.value is None or self.value == "":
            return params
        return params.add(self.key, self.value)


@dataclass(frozen=True)
class RepeatedParam:
    key: str
    values: Sequence[Any] = ()

    def contribute(self, params: QueryParams) -> QueryParams:
        for value in self.values or ():
            params = params.add(self.key, value)
        return params


@dataclass(frozen=True)
class JoinedParam:
    key: str
    values: Sequence[Any] = ()
    separator: str = " "

    def contribute(self, params: QueryParams) -> QueryParams:
        if not self.values:
            return params
        return params.add(self.key, self.separator.join(to_query_value(v) for v in self.values))


@dataclass(frozen=True)
class ConditionalParam:
    condition: bool
    key: str
    value: Any

    def contribute(self, params: QueryParams) -> QueryParams:
        if not self.condition:
            return params
        return params.add(self.key, self.value)


def encode_query(*contributors: Optional[QueryContributor]) -> QueryParams:
    """Apply contributors in order to a fresh QueryParams."""
    return QueryParams().extend(contributors)
