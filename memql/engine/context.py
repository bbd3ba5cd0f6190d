""" Host contexts: where the parser gets its inputs from

The host (a GraphQL resolver, an API endpoint) provides raw arguments and wants to know
whether filtering and sorting were handled, so that it does not apply them once again.
"""

from __future__ import annotations

from collections import abc
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ResolverContext(Protocol):
    """ Gives argument values: first, after, last, before """

    def argument_value(self, name: str) -> Any:
        ...


@runtime_checkable
class FilterContext(Protocol):
    """ Gives the filter tree, receives the "handled" signal """

    def to_dict(self) -> Optional[abc.Mapping[str, Any]]:
        ...

    def handled(self, is_handled: bool) -> None:
        ...


@runtime_checkable
class SortingContext(Protocol):
    """ Gives sorting groups, receives the "handled" signal """

    def to_list(self) -> abc.Sequence[abc.Mapping[str, Any]]:
        ...

    def handled(self, is_handled: bool) -> None:
        ...


class ArgumentsContext:
    """ Resolver context for a plain dict of arguments

    Example:
        ArgumentsContext({'first': 10, 'after': 'MQ=='})
    """

    def __init__(self, arguments: Optional[abc.Mapping[str, Any]] = None, **kwargs):
        self.arguments = {**(arguments or {}), **kwargs}

    def argument_value(self, name: str) -> Any:
        return self.arguments.get(name)

    def __repr__(self):
        return f'{type(self).__name__}({self.arguments!r})'


class HandledFlag:
    """ Remembers the "handled" signal """
    is_handled: bool = False

    def handled(self, is_handled: bool) -> None:
        self.is_handled = is_handled


class FilterInput(HandledFlag):
    """ Filter context for a filter tree you already have

    Example:
        FilterInput({'age': {'gte': 18}})
    """

    def __init__(self, value: Optional[abc.Mapping[str, Any]] = None):
        self.value = value

    def to_dict(self) -> Optional[abc.Mapping[str, Any]]:
        return self.value

    def __repr__(self):
        return f'{type(self).__name__}({self.value!r})'


class SortingInput(HandledFlag):
    """ Sorting context for sorting groups you already have

    Example:
        SortingInput([{'name': 'ASC', 'age': 'DESC'}])
    """

    def __init__(self, groups: Optional[abc.Sequence[abc.Mapping[str, Any]]] = None):
        self.groups = list(groups or ())

    def to_list(self) -> abc.Sequence[abc.Mapping[str, Any]]:
        return self.groups

    def __repr__(self):
        return f'{type(self).__name__}({self.groups!r})'
