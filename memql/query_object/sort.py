""" Sort input: the "order" argument

The API gives a list of groups, each group a mapping { field name => direction }:

    [ { name: ASC, age: DESC } ]

Only the first group is used. Fields within the group define the ordering: the first one is the primary key,
others are tie-breakers.
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Optional, Union

from memql import exc

from .base import OperationInputBase


@dataclass
class SortQuery(OperationInputBase):
    """ Sort input: the list of fields and directions to sort with """
    # Note that the list is an ordered collection: order matters here
    fields: list[SortingField]

    @cached_property
    def names(self) -> frozenset[str]:
        """ Get a set of field names involved in sorting """
        return frozenset(field.name for field in self.fields)

    def __contains__(self, field: str):
        """ Check if the field is used in sorting """
        return field in self.names

    @classmethod
    def from_groups(cls, groups: Optional[abc.Sequence[abc.Mapping[str, Any]]]):
        """ Parse sorting groups: the way you get them from the API """
        # Empty
        if not groups:
            return cls(fields=[])

        # Check types
        if not isinstance(groups, (list, tuple)):
            raise exc.QueryObjectError('"sort" must be an array')
        if not isinstance(groups[0], abc.Mapping):
            raise exc.QueryObjectError('"sort" must be an array of objects')

        # Construct.
        # Only the first group is honored
        fields = [
            SortingField(name=name, direction=SortingDirection.parse(direction))
            for name, direction in groups[0].items()
        ]
        return cls(fields=fields)

    def export(self) -> list[dict[str, str]]:
        if not self.fields:
            return []
        return [{field.name: field.direction.value for field in self.fields}]


@dataclass
class SortingField:
    name: str
    direction: SortingDirection

    __slots__ = 'name', 'direction'

    @property
    def descending(self) -> bool:
        return self.direction == SortingDirection.DESC


class SortingDirection(Enum):
    ASC = 'ASC'
    DESC = 'DESC'

    @classmethod
    def parse(cls, value: Union[str, SortingDirection, Any]) -> SortingDirection:
        """ Get the direction: DESC if it says so, ASC otherwise """
        if isinstance(value, SortingDirection):
            return value

        # Foreign enums: look at the name
        if isinstance(value, Enum):
            value = value.name

        if isinstance(value, str) and value.upper() == 'DESC':
            return cls.DESC
        else:
            return cls.ASC
